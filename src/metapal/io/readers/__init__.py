"""
Scan file readers.

- MzMLReader: mzML files (pyteomics)

Convenience functions:
- read_mzml(): Load mzML file into MsDataFile
"""

from .mzml import MzMLReader, parse_scan, read_mzml

__all__ = [
    "MzMLReader",
    "parse_scan",
    "read_mzml",
]
