"""
Column layout of stored scan metadata.

A stored scan is one row with one column per metadata field. The column
names below are the contract with any storage or export layer: they must be
reproduced exactly, in this order. Controlled-vocabulary columns hold the
PSI-MS accession of the term.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from .ms_data_scan_model import MsDataScanModel


# Column name -> MsDataScanModel attribute
COLUMN_ATTRIBUTES: dict[str, str] = {
    'Id': 'id',
    'DataFileId': 'data_file_id',
    # Required
    'ScanNumber': 'scan_number',
    'SpectrumRepresentation': 'spectrum_representation',
    'MassSpectrumType': 'mass_spectrum_type',
    'MsLevel': 'ms_level',
    'MassAnalyzerType': 'mass_analyzer_type',
    'ScanPolarity': 'scan_polarity',
    # Optional
    'ScanStartTime': 'scan_start_time',
    'ScanWindowUpperLimit': 'scan_window_upper_limit',
    'ScanWindowLowerLimit': 'scan_window_lower_limit',
    'FilterString': 'filter_string',
    'TotalIonCurrent': 'total_ion_current',
    'IonInjectionTime': 'ion_injection_time',
    'PrecursorScanNumber': 'precursor_scan_number',
    'SelectedIonMz': 'selected_ion_mz',
    'ExperimentalPrecursorMonoisotopicMz': 'experimental_precursor_monoisotopic_mz',
    'IsolationWindowTargetMz': 'isolation_window_target_mz',
    'IsolationWindowLowerOffset': 'isolation_window_lower_offset',
    'IsolationWindowUpperOffset': 'isolation_window_upper_offset',
    'DissociationMethod': 'dissociation_method',
    'NormalizedCollisionEnergy': 'normalized_collision_energy',
    'SelectedIonChargeStateGuess': 'selected_ion_charge_state_guess',
    'SelectedIonIntensity': 'selected_ion_intensity',
    'NativeId': 'native_id',
}

COLUMNS: tuple[str, ...] = tuple(COLUMN_ATTRIBUTES)

REQUIRED_COLUMNS: frozenset[str] = frozenset({
    'DataFileId',
    'ScanNumber',
    'SpectrumRepresentation',
    'MassSpectrumType',
    'MsLevel',
    'MassAnalyzerType',
    'ScanPolarity',
})

# Stored as nullable integers (pandas "Int64") when tabulated
INTEGER_COLUMNS: tuple[str, ...] = (
    'Id',
    'DataFileId',
    'ScanNumber',
    'MsLevel',
    'PrecursorScanNumber',
    'SelectedIonChargeStateGuess',
)

INTEGER_ATTRIBUTES: frozenset[str] = frozenset(
    COLUMN_ATTRIBUTES[column] for column in INTEGER_COLUMNS
)


def to_dataframe(models: Iterable['MsDataScanModel']) -> pd.DataFrame:
    """
    Tabulate scan metadata, one row per scan.

    Args:
        models: Metadata entities, typically all scans of one data file.

    Returns:
        DataFrame with exactly the columns of COLUMNS, in order. Integer
        columns use the nullable "Int64" dtype, so an absent precursor or
        charge is <NA> rather than turning the column into floats. Other
        absent values are None/NaN.
    """
    frame = pd.DataFrame.from_records(
        [model.to_record() for model in models],
        columns=list(COLUMNS),
    )
    return frame.astype({column: "Int64" for column in INTEGER_COLUMNS})
