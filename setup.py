# -*- coding: utf-8 -*-
import setuptools

def get_version():
    with(open("src/TristImg/__init__.py", "r")) as fh:
        for line in fh:
            if line.startswith("__version__"):
                delim = '"' if '"' in line else "'"
                return line.split(delim)[1]
        else:
            raise RuntimeError("Unable to find version string.")
                
def get_long_description():
    with open("README.md", "r") as fh: description = fh.read()
    return(description)
    
setuptools.setup(
    name="TristImg",
    version=get_version(),
    description=\
        "Locate and read Tristan event mode data collections (NeXus/HDF5).",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    project_urls={},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent"],
    license='MIT',
    package_dir={"":"src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "h5py",
        "tqdm"],
    extras_require={
        "test": ["pytest"]},
    entry_points={
        "console_scripts": ["tristimg=TristImg.cli:main"]},
    include_package_data=True)
