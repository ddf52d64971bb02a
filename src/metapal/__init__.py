"""
metapal: PSI-MS scan metadata for mass spectrometry data files.

Converts source scans into controlled-vocabulary conformant metadata
records ready for storage.
"""

from .controlled_vocabulary import (
    DissociationMethodType,
    MassAnalyzerType,
    MassSpectrumType,
    ScanPolarityType,
    SpectrumRepresentationType,
)
from .core import MsDataFile, MsDataScan
from .exceptions import MetapalError, UnsupportedInstrumentValue
from .models import MsDataScanModel, convert_scans

__version__ = "0.1.0"

__all__ = [
    "MsDataScan",
    "MsDataFile",
    "MsDataScanModel",
    "convert_scans",
    "SpectrumRepresentationType",
    "MassSpectrumType",
    "MassAnalyzerType",
    "ScanPolarityType",
    "DissociationMethodType",
    "MetapalError",
    "UnsupportedInstrumentValue",
]
