"""
I/O module for reading source scans from mass spectrometry files.

Readers:
- MzMLReader: Read mzML files

Convenience functions:
- read_mzml(): Load mzML to MsDataFile

Base classes:
- ScanReader: Abstract base class for all readers
"""

from .base import ScanReader
from .readers import MzMLReader, parse_scan, read_mzml

__all__ = [
    "ScanReader",
    "MzMLReader",
    "parse_scan",
    "read_mzml",
]
