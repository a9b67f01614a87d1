"""Python decoders for WMO/NOAA tropical text bulletins

The National Hurricane Center and its reconnaissance partners publish a
handful of fixed format text products (plan of the day, recon
observations, high density observations, tropical weather outlooks).
This package turns those bulletins into structured records.
"""

import os
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pywmo")
    pkgdir = os.path.dirname(os.path.dirname(os.path.realpath(__file__)))
    if not pkgdir.endswith("site-packages"):
        __version__ += "-dev"
except PackageNotFoundError:
    # package is not installed
    __version__ = "dev"
