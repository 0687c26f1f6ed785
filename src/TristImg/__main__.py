# -*- coding: utf-8 -*-
"""Allow ``python -m TristImg``."""
import sys

from TristImg.cli import main

sys.exit(main())
