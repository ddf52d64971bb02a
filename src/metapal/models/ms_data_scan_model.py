"""
Scan metadata entity.

This module defines MsDataScanModel, the stored record of one scan's
acquisition metadata, and the mapping that builds it from a source
MsDataScan. Every scientific field corresponds to a PSI-MS term (accession
noted per attribute) and carries the unit fixed by that term; units are not
stored, the mapper normalises values before assignment.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..controlled_vocabulary import (
    DissociationMethodType,
    MassAnalyzerType,
    MassSpectrumType,
    ScanPolarityType,
    SpectrumRepresentationType,
    to_dissociation_method_type,
    to_mass_analyzer_type,
    to_mass_spectrum_type,
    to_scan_polarity_type,
    to_spectrum_representation_type,
)
from ..core.ms_data_scan import MsDataScan
from ..core.spectrum import MzSpectrum
from .records import COLUMN_ATTRIBUTES, INTEGER_ATTRIBUTES, REQUIRED_COLUMNS


# Plain decimal or exponent notation; rejects "nan", "inf" and digit separators
_NUMBER_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')

_ENUM_ATTRIBUTES = {
    'spectrum_representation': SpectrumRepresentationType,
    'mass_spectrum_type': MassSpectrumType,
    'mass_analyzer_type': MassAnalyzerType,
    'scan_polarity': ScanPolarityType,
    'dissociation_method': DissociationMethodType,
}


def _narrow(value: Optional[float]) -> Optional[float]:
    """Round a double to the nearest single-precision value; None stays None."""
    if value is None:
        return None
    return float(np.float32(value))


def _parse_collision_energy(description: Optional[str]) -> Optional[float]:
    """
    Read a normalized collision energy from a free-text scan description.

    Best effort: anything that is not a plain finite number gives None.
    """
    if description is None:
        return None
    text = description.strip()
    if not _NUMBER_PATTERN.match(text):
        return None
    energy = _narrow(float(text))
    if energy is None or not math.isfinite(energy):
        return None
    return energy


def _precursor_scan_number(scan: MsDataScan) -> Optional[int]:
    """One-based precursor scan number, or None when the scan has no precursor."""
    if scan.msn_order == 1:
        return None
    reference = scan.one_based_precursor_scan_number
    if reference is None:
        return None
    reference = int(reference)
    # NO_PRECURSOR and any other non-positive reference mean "no precursor"
    if reference < 1:
        return None
    return reference


@dataclass(frozen=True, slots=True)
class MsDataScanModel:
    """
    Acquisition metadata of one mass spectrometry scan.

    Instances are immutable. ``id`` is the surrogate key assigned by the
    persistence layer (None until then, see :meth:`with_id`) and
    ``data_file_id`` references the owning data file.

    Attributes:
        scan_number: MS:1003057 scan number. 1-based order of acquisition
            within the run.
        spectrum_representation: MS:1000525 spectrum representation.
        mass_spectrum_type: MS:1000559 spectrum type.
        ms_level: MS:1000511 ms level. Stage number achieved in a multi
            stage mass spectrometry acquisition.
        mass_analyzer_type: MS:1000443 mass analyzer type.
        scan_polarity: MS:1000465 scan polarity.

        scan_start_time: MS:1000016 scan start time, in minutes.
        scan_window_upper_limit: MS:1000500 scan window upper limit (m/z).
        scan_window_lower_limit: MS:1000501 scan window lower limit (m/z).
        filter_string: MS:1000512 filter string. Thermo instrument settings
            for the scan.
        total_ion_current: MS:1000285 total ion current.
        ion_injection_time: MS:1000927 ion injection time, in milliseconds.
        precursor_scan_number: One-based scan number of the scan in which
            the isolated precursor was observed. None for MS1 scans.
        selected_ion_mz: MS:1000744 selected ion m/z.
        experimental_precursor_monoisotopic_mz: MS:1003208 experimental
            precursor monoisotopic m/z.
        isolation_window_target_mz: MS:1000827 isolation window target m/z.
        isolation_window_lower_offset: MS:1000828 isolation window lower
            offset (m/z). Always the negative of the upper offset.
        isolation_window_upper_offset: MS:1000829 isolation window upper
            offset (m/z).
        dissociation_method: MS:1000044 dissociation method.
        normalized_collision_energy: MS:1000138 normalized collision energy,
            in percent.

        selected_ion_charge_state_guess: Instrument's best guess for the
            charge state of the selected ion.
        selected_ion_intensity: Intensity of the selected precursor ion.
        native_id: Format-specific scan identifier, opaque.

        mass_spectrum: MS:1000294 mass spectrum. Kept in memory only; not
            compared and not part of the stored record.
    """
    data_file_id: int

    # Required fields
    scan_number: int
    spectrum_representation: SpectrumRepresentationType
    mass_spectrum_type: MassSpectrumType
    ms_level: int
    mass_analyzer_type: MassAnalyzerType
    scan_polarity: ScanPolarityType

    # Acquisition details
    scan_start_time: Optional[float] = None
    scan_window_upper_limit: Optional[float] = None
    scan_window_lower_limit: Optional[float] = None
    filter_string: Optional[str] = None
    total_ion_current: Optional[float] = None
    ion_injection_time: Optional[float] = None

    # Precursor info (for MS2+)
    precursor_scan_number: Optional[int] = None
    selected_ion_mz: Optional[float] = None
    experimental_precursor_monoisotopic_mz: Optional[float] = None
    isolation_window_target_mz: Optional[float] = None
    isolation_window_lower_offset: Optional[float] = None
    isolation_window_upper_offset: Optional[float] = None
    dissociation_method: Optional[DissociationMethodType] = None
    normalized_collision_energy: Optional[float] = None
    selected_ion_charge_state_guess: Optional[int] = None
    selected_ion_intensity: Optional[float] = None

    native_id: Optional[str] = None
    id: Optional[int] = None

    mass_spectrum: Optional[MzSpectrum] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate metadata consistency."""
        if self.scan_number < 1:
            raise ValueError(f"scan_number must be >= 1, got {self.scan_number}")
        if self.ms_level < 1:
            raise ValueError(f"ms_level must be >= 1, got {self.ms_level}")
        if (self.ms_level == 1) != (self.mass_spectrum_type is MassSpectrumType.MS1_SPECTRUM):
            raise ValueError(
                f"ms_level {self.ms_level} is inconsistent with "
                f"mass_spectrum_type {self.mass_spectrum_type.name}"
            )
        if self.precursor_scan_number is not None and self.ms_level == 1:
            raise ValueError("MS1 scans cannot have a precursor_scan_number")
        lower = self.isolation_window_lower_offset
        upper = self.isolation_window_upper_offset
        if lower is not None and upper is not None and lower != -upper:
            raise ValueError(
                f"isolation window offsets must be symmetric, got {lower} and {upper}"
            )

    @classmethod
    def from_ms_data_scan(cls, scan: MsDataScan, data_file_id: int) -> 'MsDataScanModel':
        """
        Build the metadata entity for one source scan.

        Args:
            scan: Source scan. It is not modified.
            data_file_id: Key of the data file record that owns the scan.

        Returns:
            New MsDataScanModel with ``id`` unset.

        Raises:
            UnsupportedInstrumentValue: If the scan's mass analyzer or
                dissociation type has no PSI-MS term.
        """
        # Controlled-vocabulary lookups first so nothing is built for bad input
        mass_analyzer_type = to_mass_analyzer_type(scan.mz_analyzer)
        dissociation_method = to_dissociation_method_type(scan.dissociation_type)

        window = scan.scan_window_range
        half_width = None
        # A NaN or infinite width reported by the instrument means no usable window
        if scan.isolation_width is not None and math.isfinite(scan.isolation_width):
            half_width = scan.isolation_width / 2

        return cls(
            data_file_id=data_file_id,
            scan_number=scan.one_based_scan_number,
            ms_level=scan.msn_order,
            # DDA, DIA, SIM and SRM scans all come out as MSn here
            mass_spectrum_type=to_mass_spectrum_type(scan.msn_order),
            spectrum_representation=to_spectrum_representation_type(scan.is_centroid),
            scan_polarity=to_scan_polarity_type(scan.polarity),
            scan_start_time=_narrow(scan.retention_time),
            scan_window_lower_limit=_narrow(window.minimum) if window else None,
            scan_window_upper_limit=_narrow(window.maximum) if window else None,
            filter_string=scan.scan_filter,
            mass_analyzer_type=mass_analyzer_type,
            total_ion_current=_narrow(scan.total_ion_current),
            ion_injection_time=_narrow(scan.injection_time),
            native_id=scan.native_id,
            selected_ion_mz=_narrow(scan.selected_ion_mz),
            selected_ion_charge_state_guess=scan.selected_ion_charge_state_guess,
            selected_ion_intensity=_narrow(scan.selected_ion_intensity),
            experimental_precursor_monoisotopic_mz=_narrow(scan.selected_ion_monoisotopic_guess_mz),
            isolation_window_target_mz=_narrow(scan.isolation_mz),
            isolation_window_upper_offset=_narrow(half_width),
            isolation_window_lower_offset=None if half_width is None else _narrow(-half_width),
            dissociation_method=dissociation_method,
            precursor_scan_number=_precursor_scan_number(scan),
            normalized_collision_energy=_parse_collision_energy(scan.scan_description),
            mass_spectrum=scan.mass_spectrum,
        )

    @property
    def is_ms1(self) -> bool:
        return self.ms_level == 1

    @property
    def has_precursor(self) -> bool:
        return self.precursor_scan_number is not None

    @property
    def isolation_window_width(self) -> Optional[float]:
        """Total isolation window width in m/z."""
        if self.isolation_window_lower_offset is None or self.isolation_window_upper_offset is None:
            return None
        return self.isolation_window_upper_offset - self.isolation_window_lower_offset

    def with_id(self, id: int) -> 'MsDataScanModel':
        """Return a copy carrying the surrogate key assigned at persistence time."""
        return replace(self, id=id)

    def to_record(self) -> dict[str, Any]:
        """
        Flatten into a storage row.

        Returns:
            Mapping of column name to value, in column order. Controlled
            vocabulary fields hold their PSI-MS accession; the transient
            mass spectrum is left out.
        """
        record: dict[str, Any] = {}
        for column, attribute in COLUMN_ATTRIBUTES.items():
            value = getattr(self, attribute)
            if attribute in _ENUM_ATTRIBUTES and value is not None:
                value = value.accession
            record[column] = value
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'MsDataScanModel':
        """
        Rebuild an entity from a storage row produced by :meth:`to_record`.

        Missing optional columns and missing values (None, NaN, pd.NA, as
        found in a DataFrame row) are read as None.

        Raises:
            KeyError: If a required column is missing.
            ValueError: If a column holds an unknown PSI-MS accession.
        """
        missing = REQUIRED_COLUMNS - set(record)
        if missing:
            raise KeyError(f"Missing required columns: {sorted(missing)}")

        kwargs: dict[str, Any] = {}
        for column, attribute in COLUMN_ATTRIBUTES.items():
            value = record.get(column)
            if value is None or pd.isna(value):
                value = None
            elif attribute in _ENUM_ATTRIBUTES:
                value = _ENUM_ATTRIBUTES[attribute].from_accession(value)
            elif attribute in INTEGER_ATTRIBUTES:
                value = int(value)
            elif isinstance(value, np.floating):
                value = float(value)
            kwargs[attribute] = value
        return cls(**kwargs)
