"""
Scan metadata entity and its conversion from source scans.

- MsDataScanModel: Stored acquisition metadata of one scan
- convert_scans(): Convert the scans of a data file
- ConversionOptions / ConversionResult: Batch conversion options and outcome
- COLUMNS / to_dataframe(): Storage column layout and tabular export
"""

from .ms_data_scan_model import MsDataScanModel
from .conversion import (
    ConversionOptions,
    ConversionResult,
    ErrorPolicy,
    ScanConversionFailure,
    convert_scans,
)
from .records import COLUMNS, to_dataframe

__all__ = [
    "MsDataScanModel",
    "convert_scans",
    "ConversionOptions",
    "ConversionResult",
    "ErrorPolicy",
    "ScanConversionFailure",
    "COLUMNS",
    "to_dataframe",
]
