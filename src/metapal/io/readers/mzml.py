"""
mzML scan reader using pyteomics.

This module provides the MzMLReader class, which reads mzML files and
exposes each spectrum as a source MsDataScan, ready to be mapped onto
scan metadata.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar, Optional

import numpy as np

from ..base import ScanReader
from ...core import (
    NO_PRECURSOR,
    DissociationType,
    MsDataFile,
    MsDataScan,
    MZAnalyzerType,
    MzRange,
    MzSpectrum,
    Polarity,
)


logger = logging.getLogger(__name__)


# Mapping of analyzer CV term names to MZAnalyzerType
_ANALYZER_MAP: dict[str, MZAnalyzerType] = {
    'orbitrap': MZAnalyzerType.ORBITRAP,
    'linear ion trap': MZAnalyzerType.ION_TRAP_2D,
    'radial ejection linear ion trap': MZAnalyzerType.ION_TRAP_2D,
    'axial ejection linear ion trap': MZAnalyzerType.ION_TRAP_2D,
    'quadrupole ion trap': MZAnalyzerType.ION_TRAP_3D,
    'quadrupole': MZAnalyzerType.QUADRUPOLE,
    'time-of-flight': MZAnalyzerType.TOF,
    'fourier transform ion cyclotron resonance mass spectrometer': MZAnalyzerType.FTICR,
    'magnetic sector': MZAnalyzerType.SECTOR,
    'asymmetric track lossless time-of-flight analyzer': MZAnalyzerType.ASTRAL,
}

# Mapping of activation CV term names to DissociationType
_ACTIVATION_MAP: dict[str, DissociationType] = {
    'collision-induced dissociation': DissociationType.CID,
    'low-energy collision-induced dissociation': DissociationType.LOW_CID,
    'in-source collision-induced dissociation': DissociationType.ISCID,
    'beam-type collision-induced dissociation': DissociationType.HCD,
    'supplemental beam-type collision-induced dissociation': DissociationType.HCD,
    'electron transfer dissociation': DissociationType.ETD,
    'electron capture dissociation': DissociationType.ECD,
    'infrared multiphoton dissociation': DissociationType.IRMPD,
    'pulsed q dissociation': DissociationType.PQD,
    'ultraviolet photodissociation': DissociationType.UVPD,
}

# Thermo trailer value written by msconvert as a userParam on the scan
_MONOISOTOPIC_MZ_PARAM = '[Thermo Trailer Extra]Monoisotopic M/Z:'

_SECONDS_PER_UNIT = {'second': 1.0, 's': 1.0, 'minute': 60.0, 'min': 60.0, 'hour': 3600.0}

# Parent term of every vendor instrument model term
_INSTRUMENT_MODEL_ACCESSION = 'MS:1000031'


def _first(value):
    """Return the first element of a pyteomics list-or-dict value."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _extract_scan_number(native_id: str) -> Optional[int]:
    """
    Extract scan number from native ID string.

    Common formats:
    - "controllerType=0 controllerNumber=1 scan=123"
    - "scan=123"
    - "spectrum=123"
    - "index=123"
    - Just a number
    """
    if not native_id:
        return None

    patterns = [
        r'scan=(\d+)',
        r'spectrum=(\d+)',
        r'index=(\d+)',
        r'^(\d+)$',
    ]

    for pattern in patterns:
        match = re.search(pattern, native_id)
        if match:
            return int(match.group(1))

    return None


def _parse_polarity(spectrum_data: dict) -> Polarity:
    if 'negative scan' in spectrum_data:
        return Polarity.NEGATIVE
    if 'positive scan' in spectrum_data:
        return Polarity.POSITIVE
    return Polarity.UNKNOWN


def _parse_activation(activation: dict) -> DissociationType:
    """Parse activation type from an mzML activation dictionary."""
    found = {_ACTIVATION_MAP[key] for key in activation if key in _ACTIVATION_MAP}
    if DissociationType.ETD in found and DissociationType.HCD in found:
        return DissociationType.ETHCD
    for dissociation in (
        DissociationType.ETD,
        DissociationType.ECD,
        DissociationType.UVPD,
        DissociationType.IRMPD,
        DissociationType.PQD,
        DissociationType.HCD,
        DissociationType.ISCID,
        DissociationType.LOW_CID,
        DissociationType.CID,
    ):
        if dissociation in found:
            return dissociation
    return DissociationType.UNKNOWN


def _parse_analyzer(instrument_configuration: dict) -> MZAnalyzerType:
    """
    Determine the analyzer of an instrument configuration.

    With several analyzers (e.g. quadrupole + time-of-flight) the one with
    the highest component order, i.e. the one closest to the detector, wins.
    """
    components = instrument_configuration.get('componentList', {})
    analyzers = components.get('analyzer', [])
    if isinstance(analyzers, dict):
        analyzers = [analyzers]

    best: Optional[tuple[int, MZAnalyzerType]] = None
    for position, component in enumerate(analyzers):
        order = int(component.get('order', position))
        for key in component:
            if key in _ANALYZER_MAP and (best is None or order >= best[0]):
                best = (order, _ANALYZER_MAP[key])
    if best is not None:
        return best[1]

    # Some writers put the analyzer term directly on the configuration
    for key in instrument_configuration:
        if key in _ANALYZER_MAP:
            return _ANALYZER_MAP[key]
    return MZAnalyzerType.UNKNOWN


def _instrument_model(instrument_configuration: dict, cv) -> Optional[str]:
    """
    Name of the instrument model term on an instrument configuration.

    pyteomics stores the model under its own term name (e.g. "LTQ Orbitrap
    Velos"), so keys are checked against the PSI-MS vocabulary for terms
    derived from "instrument model".
    """
    for key in instrument_configuration:
        accession = getattr(key, 'accession', None)
        if accession is None:
            continue
        try:
            term = cv[accession]
        except KeyError:
            continue
        if term.is_of_type(_INSTRUMENT_MODEL_ACCESSION):
            # The generic term carries the model name as its value
            return str(instrument_configuration[key] or key)
    return None


def _to_minutes(value) -> float:
    """Convert a pyteomics unitfloat scan start time to minutes (minutes if no unit)."""
    unit = getattr(value, 'unit_info', None) or 'minute'
    seconds_per_unit = _SECONDS_PER_UNIT.get(unit)
    if seconds_per_unit is None:
        raise ValueError(f"Unsupported scan start time unit: {unit}")
    return float(value) * seconds_per_unit / 60.0


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


def parse_scan(
    spectrum_data: dict,
    index: int,
    analyzers: Optional[dict[str, MZAnalyzerType]] = None,
    default_analyzer: MZAnalyzerType = MZAnalyzerType.UNKNOWN,
) -> MsDataScan:
    """
    Parse a pyteomics spectrum dictionary into a source scan.

    Args:
        spectrum_data: Dictionary from pyteomics.
        index: Position in file (0-based); gives the scan number when the
            native ID does not contain one.
        analyzers: Analyzer per instrument configuration id.
        default_analyzer: Analyzer for scans without a configuration
            reference.

    Returns:
        Parsed MsDataScan.
    """
    analyzers = analyzers or {}

    native_id = spectrum_data.get('id', '')
    scan_number = _extract_scan_number(native_id) or index + 1
    ms_level = int(spectrum_data.get('ms level', 1))

    mz = spectrum_data.get('m/z array', np.array([], dtype=np.float64))
    intensity = spectrum_data.get('intensity array', np.array([], dtype=np.float64))
    spectrum = MzSpectrum(mz=mz, intensity=intensity)

    scan_info = _first(spectrum_data.get('scanList', {}).get('scan', [])) or {}

    rt = scan_info.get('scan start time', spectrum_data.get('scan start time'))
    retention_time = _to_minutes(rt) if rt is not None else 0.0

    scan_window_range = None
    window = _first(scan_info.get('scanWindowList', {}).get('scanWindow', []))
    if window:
        lower = window.get('scan window lower limit')
        upper = window.get('scan window upper limit')
        if lower is not None and upper is not None:
            scan_window_range = MzRange(float(lower), float(upper))

    analyzer = analyzers.get(scan_info.get('instrumentConfigurationRef'), default_analyzer)

    tic = spectrum_data.get('total ion current')
    if tic is None:
        logger.debug(f"No total ion current for {native_id!r}, summing intensities")
        tic = spectrum.total_intensity

    monoisotopic_mz = scan_info.get(_MONOISOTOPIC_MZ_PARAM)
    if monoisotopic_mz is not None:
        # Thermo reports 0 when no monoisotopic peak was determined
        monoisotopic_mz = float(monoisotopic_mz) or None

    scan_kwargs = dict(
        one_based_scan_number=scan_number,
        msn_order=ms_level,
        is_centroid='centroid spectrum' in spectrum_data,
        polarity=_parse_polarity(spectrum_data),
        retention_time=retention_time,
        mz_analyzer=analyzer,
        scan_window_range=scan_window_range,
        scan_filter=scan_info.get('filter string'),
        total_ion_current=float(tic),
        injection_time=_optional_float(scan_info.get('ion injection time')),
        native_id=native_id or None,
        scan_description=spectrum_data.get('spectrum title'),
        selected_ion_monoisotopic_guess_mz=monoisotopic_mz,
        mass_spectrum=spectrum,
    )

    if ms_level > 1:
        scan_kwargs.update(_parse_precursor(spectrum_data))

    return MsDataScan(**scan_kwargs)


def _parse_precursor(spectrum_data: dict) -> dict:
    """Parse precursor fields of an MSn spectrum into MsDataScan keyword arguments."""
    precursor = _first(spectrum_data.get('precursorList', {}).get('precursor', []))
    if not precursor:
        return {}

    fields: dict = {}

    ion = _first(precursor.get('selectedIonList', {}).get('selectedIon', [])) or {}
    fields['selected_ion_mz'] = _optional_float(ion.get('selected ion m/z'))
    charge = ion.get('charge state')
    fields['selected_ion_charge_state_guess'] = int(charge) if charge is not None else None
    fields['selected_ion_intensity'] = _optional_float(ion.get('peak intensity'))

    isolation = precursor.get('isolationWindow', {})
    fields['isolation_mz'] = _optional_float(isolation.get('isolation window target m/z'))
    iso_lower = isolation.get('isolation window lower offset')
    iso_upper = isolation.get('isolation window upper offset')
    if iso_lower is not None and iso_upper is not None:
        fields['isolation_width'] = float(iso_lower) + float(iso_upper)

    fields['dissociation_type'] = _parse_activation(precursor.get('activation', {}))

    precursor_scan = _extract_scan_number(precursor.get('spectrumRef', ''))
    fields['one_based_precursor_scan_number'] = (
        precursor_scan if precursor_scan is not None else NO_PRECURSOR
    )
    return fields


class MzMLReader(ScanReader):
    """
    Reader for mzML files using pyteomics.

    Example:
        >>> with MzMLReader("sample.mzML") as reader:
        ...     for scan in reader:
        ...         print(scan.one_based_scan_number, scan.msn_order)
        ...
        ...     # Random access
        ...     scan = reader.get_scan(100)
    """

    format_name: ClassVar[str] = "mzML"
    supported_extensions: ClassVar[list[str]] = ['.mzml']

    def __init__(self, path: Path | str):
        """
        Initialize the mzML reader.

        Args:
            path: Path to mzML file.
        """
        super().__init__(path)
        self._reader = None
        self._index: Optional[list[str]] = None  # Native IDs for random access
        self._analyzers: dict[str, MZAnalyzerType] = {}
        self._configurations: list[dict] = []
        self._default_analyzer = MZAnalyzerType.UNKNOWN
        self._run_metadata: Optional[dict] = None

    def __enter__(self) -> 'MzMLReader':
        """Open the file for reading."""
        from pyteomics import mzml

        self._reader = mzml.MzML(str(self.path))
        self._build_index()
        self._read_instrument_configurations()
        logger.info(f"Opened {self.path.name}: {len(self._index)} spectra")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the file."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def _require_open(self) -> None:
        if self._reader is None or self._index is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")

    def _build_index(self) -> None:
        """Build index of spectrum native IDs."""
        self._index = []
        index = getattr(self._reader, 'index', None)
        # mzML files have hierarchical index with 'spectrum' key
        if index and 'spectrum' in index:
            self._index = list(index['spectrum'].keys())

    def _read_instrument_configurations(self) -> None:
        """Map each instrument configuration id to its analyzer."""
        self._analyzers = {}
        configurations = self._configurations = list(
            self._reader.iterfind('instrumentConfigurationList/instrumentConfiguration')
        )
        for configuration in configurations:
            self._analyzers[configuration.get('id')] = _parse_analyzer(configuration)
        if configurations:
            self._default_analyzer = self._analyzers[configurations[0].get('id')]
        else:
            logger.debug(f"No instrument configuration in {self.path.name}")
        self._reader.reset()

    def _parse(self, spectrum_data: dict, index: int) -> MsDataScan:
        return parse_scan(spectrum_data, index, self._analyzers, self._default_analyzer)

    def __iter__(self) -> Iterator[MsDataScan]:
        """Iterate over all scans in the file."""
        self._require_open()
        self._reader.reset()
        for idx, spectrum_data in enumerate(self._reader):
            yield self._parse(spectrum_data, idx)

    def __len__(self) -> int:
        """Total number of spectra in the file."""
        self._require_open()
        return len(self._index)

    def get_scan(self, scan_number: int) -> MsDataScan:
        """
        Get scan by scan number.

        Native IDs following the common patterns are looked up directly;
        otherwise the file is searched linearly.

        Raises:
            KeyError: If scan number not found.
        """
        self._require_open()

        for pattern in [
            f"controllerType=0 controllerNumber=1 scan={scan_number}",
            f"scan={scan_number}",
            f"spectrum={scan_number}",
            str(scan_number),
        ]:
            if pattern in self._index:
                spectrum_data = self._reader.get_by_id(pattern)
                return self._parse(spectrum_data, self._index.index(pattern))

        for scan in self:
            if scan.one_based_scan_number == scan_number:
                return scan

        raise KeyError(f"Scan number {scan_number} not found")

    @property
    def run_metadata(self) -> dict:
        """
        File-level metadata from the mzML header.

        Returns:
            Dictionary with instrument, software, and file info.
        """
        if self._run_metadata is not None:
            return self._run_metadata

        self._require_open()
        metadata: dict = {
            'source_file': str(self.path),
        }

        # Instrument configurations were read on open
        if self._configurations:
            configuration = self._configurations[0]
            model = _instrument_model(configuration, self._reader.cv)
            if model is not None:
                metadata['instrument_model'] = model
            if 'instrument serial number' in configuration:
                metadata['instrument_serial'] = str(configuration['instrument serial number'])

        self._reader.reset()
        software = list(self._reader.iterfind('softwareList/software'))
        self._reader.reset()
        if software:
            metadata['software_version'] = software[0].get('version', '')

        self._run_metadata = metadata
        return metadata


def read_mzml(path: Path | str) -> MsDataFile:
    """
    Convenience function to read an mzML file into an MsDataFile.

    Example:
        >>> data_file = read_mzml("sample.mzML")
        >>> print(f"Loaded {len(data_file)} scans")
    """
    with MzMLReader(path) as reader:
        return reader.to_data_file()
