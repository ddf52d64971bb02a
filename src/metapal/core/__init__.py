"""
Source scan data structures for metapal.

This module provides the acquisition-library view of mass spectrometry data
that the metadata mapper consumes:

- MsDataScan: One acquisition event with its raw attributes
- MzSpectrum: The m/z-intensity data of a scan
- MzRange: A closed m/z interval
- MsDataFile: The scans of one acquisition run
- DataFileMetadata: File-level metadata

Enums for raw instrument attributes:
- MZAnalyzerType: Mass analyzer
- DissociationType: Activation method
- Polarity: Ion polarity
"""

from .ms_data_scan import (
    NO_PRECURSOR,
    DissociationType,
    MsDataScan,
    MZAnalyzerType,
    MzRange,
    Polarity,
)
from .spectrum import MzSpectrum
from .data_file import DataFileMetadata, MsDataFile

__all__ = [
    # Main classes
    "MsDataScan",
    "MzSpectrum",
    "MzRange",
    "MsDataFile",
    "DataFileMetadata",
    # Enums
    "MZAnalyzerType",
    "DissociationType",
    "Polarity",
    # Constants
    "NO_PRECURSOR",
]
