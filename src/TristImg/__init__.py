"""
TristImg is a lightweight Python toolkit for locating and reading the data
of Tristan event mode detector collections.

A collection is described by one NeXus (HDF5) metadata file. Its dataset
``/entry/data/meta_file/fp_per_module`` declares how many HDF5 data files
each detector module wrote. The data files sit next to the metadata file and
are named ``<stem>_<N>.h5``, where ``stem`` is the metadata file name without
extension and ``N`` is a global, contiguous file number starting at 1,
zero-padded to a minimum width (6 by default).

TristImg provides utilities for:
- resolving and opening every data file of a collection, grouped by module
- reading named datasets (uint32, float, 16-bit position pairs) from any file
- a tree view of the collection for debugging
- the ``tristimg debug datasets`` command line tool

Typical workflow
----------------
Resolve a collection and display its structure::

    from TristImg.collection import Collection
    from TristImg.cli import render_tree

    with Collection.from_nexus(r"/data/run.nxs", datafile_zero_padding=6) as c:
        print(render_tree(c.as_tree()))

Read datasets from one data file::

    from TristImg import datasets as tiData

    event_id, time_offset = tiData.read_datasets(
        r"/data/run_000001.h5",
        ["event_id", "event_time_offset"]
        )

Modules
-------
- ``TristImg.collection``     : collection resolution and tree view
- ``TristImg.container``      : opening HDF5 files, typed dataset reads
- ``TristImg.datasets``       : reading datasets from arbitrary files
- ``TristImg.dtypes``         : canonical dtypes used across I/O
- ``TristImg.errors``         : exceptions
- ``TristImg.config``         : command line settings (TOML, environment)
- ``TristImg.logging_config`` : logging setup
- ``TristImg.cli``            : the ``tristimg`` command

Version
-------
This package follows semantic versioning starting from the development series.
"""

__version__ = "0.1.0"


import TristImg.dtypes
import TristImg.errors
import TristImg.container
import TristImg.collection
import TristImg.datasets
