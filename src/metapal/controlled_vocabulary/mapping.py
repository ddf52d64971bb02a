"""
Mapping of raw instrument attributes onto PSI-MS terms.

The acquisition library reports analyzer, activation and polarity with its
own enumerations (see :mod:`metapal.core.ms_data_scan`). The functions here
translate those values, or free-text tokens naming them, into the PSI-MS
enumerations of :mod:`metapal.controlled_vocabulary.psi_ms_types`.

All functions are pure and hold no state.
"""

import re
from enum import Enum
from typing import Optional, TypeVar, Union

from ..core.ms_data_scan import DissociationType, MZAnalyzerType, Polarity
from ..exceptions import UnsupportedInstrumentValue
from .psi_ms_types import (
    DissociationMethodType,
    MassAnalyzerType,
    MassSpectrumType,
    ScanPolarityType,
    SpectrumRepresentationType,
)


_E = TypeVar('_E', bound=Enum)

_TOKEN_SEPARATORS = re.compile(r'[\s_\-]+')


_MASS_ANALYZER_MAP: dict[MZAnalyzerType, MassAnalyzerType] = {
    MZAnalyzerType.QUADRUPOLE: MassAnalyzerType.QUADRUPOLE,
    MZAnalyzerType.ION_TRAP_2D: MassAnalyzerType.LINEAR_ION_TRAP,
    MZAnalyzerType.ION_TRAP_3D: MassAnalyzerType.QUADRUPOLE_ION_TRAP,
    MZAnalyzerType.ORBITRAP: MassAnalyzerType.ORBITRAP,
    MZAnalyzerType.TOF: MassAnalyzerType.TIME_OF_FLIGHT,
    MZAnalyzerType.FTICR: MassAnalyzerType.FOURIER_TRANSFORM_ION_CYCLOTRON_RESONANCE,
    MZAnalyzerType.SECTOR: MassAnalyzerType.MAGNETIC_SECTOR,
    MZAnalyzerType.ASTRAL: MassAnalyzerType.ASTRAL,
}

# DissociationType.UNKNOWN means no activation was recorded and maps to None
_DISSOCIATION_METHOD_MAP: dict[DissociationType, DissociationMethodType] = {
    DissociationType.CID: DissociationMethodType.COLLISION_INDUCED_DISSOCIATION,
    DissociationType.LOW_CID: DissociationMethodType.LOW_ENERGY_COLLISION_INDUCED_DISSOCIATION,
    DissociationType.ISCID: DissociationMethodType.IN_SOURCE_COLLISION_INDUCED_DISSOCIATION,
    DissociationType.HCD: DissociationMethodType.BEAM_TYPE_COLLISION_INDUCED_DISSOCIATION,
    DissociationType.ETD: DissociationMethodType.ELECTRON_TRANSFER_DISSOCIATION,
    DissociationType.ETHCD: DissociationMethodType.ELECTRON_TRANSFER_HIGHER_ENERGY_COLLISION_DISSOCIATION,
    DissociationType.ECD: DissociationMethodType.ELECTRON_CAPTURE_DISSOCIATION,
    DissociationType.IRMPD: DissociationMethodType.INFRARED_MULTIPHOTON_DISSOCIATION,
    DissociationType.PQD: DissociationMethodType.PULSED_Q_DISSOCIATION,
    DissociationType.UVPD: DissociationMethodType.ULTRAVIOLET_PHOTODISSOCIATION,
}


def _normalize_token(token: str) -> str:
    return _TOKEN_SEPARATORS.sub('', token).upper()


def _coerce(raw: object, enum_cls: type[_E]) -> Optional[_E]:
    """
    Resolve a raw value to a member of ``enum_cls``.

    Accepts a member, or a string naming one (case, spaces, hyphens and
    underscores are ignored: "IonTrap2D", "ion_trap_2d" and "ion-trap-2D"
    all name ION_TRAP_2D). Returns None if nothing matches.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        key = _normalize_token(raw)
        for member in enum_cls:
            if _normalize_token(member.name) == key:
                return member
    return None


def to_mass_analyzer_type(raw: Union[MZAnalyzerType, str]) -> MassAnalyzerType:
    """
    Map a raw mass analyzer onto its PSI-MS term.

    Args:
        raw: An MZAnalyzerType member or a token naming one.

    Returns:
        The matching MassAnalyzerType member.

    Raises:
        UnsupportedInstrumentValue: If the value is UNKNOWN or not recognised.
    """
    analyzer = _coerce(raw, MZAnalyzerType)
    if analyzer is None or analyzer not in _MASS_ANALYZER_MAP:
        raise UnsupportedInstrumentValue('mass analyzer', raw)
    return _MASS_ANALYZER_MAP[analyzer]


def to_dissociation_method_type(
    raw: Union[DissociationType, str, None]
) -> Optional[DissociationMethodType]:
    """
    Map a raw activation type onto its PSI-MS dissociation method.

    Scans without activation (None or DissociationType.UNKNOWN, as reported
    for MS1 scans) have no dissociation method and yield None.

    Raises:
        UnsupportedInstrumentValue: For activation types without a PSI-MS
            term (ANY_ACTIVATION_TYPE, CUSTOM, AUTODETECT) and for values
            that are not recognised.
    """
    if raw is None:
        return None
    dissociation = _coerce(raw, DissociationType)
    if dissociation is DissociationType.UNKNOWN:
        return None
    if dissociation is None or dissociation not in _DISSOCIATION_METHOD_MAP:
        raise UnsupportedInstrumentValue('dissociation method', raw)
    return _DISSOCIATION_METHOD_MAP[dissociation]


def to_scan_polarity_type(raw: Union[Polarity, str, None]) -> ScanPolarityType:
    """
    Map a raw polarity onto its PSI-MS term.

    Only an explicit negative polarity (Polarity.NEGATIVE, "negative" or
    "-") yields NEGATIVE_SCAN. Everything else, including unknown or
    missing polarity, defaults to POSITIVE_SCAN. Never raises.
    """
    if isinstance(raw, str) and raw.strip() == '-':
        return ScanPolarityType.NEGATIVE_SCAN
    if _coerce(raw, Polarity) is Polarity.NEGATIVE:
        return ScanPolarityType.NEGATIVE_SCAN
    return ScanPolarityType.POSITIVE_SCAN


def to_spectrum_representation_type(is_centroid: bool) -> SpectrumRepresentationType:
    """CENTROID for peak-picked data, PROFILE otherwise."""
    if is_centroid:
        return SpectrumRepresentationType.CENTROID
    return SpectrumRepresentationType.PROFILE


def to_mass_spectrum_type(ms_level: int) -> MassSpectrumType:
    """
    Spectrum type implied by the MS level.

    Only MS1 and MSn can be told apart from the MS level alone; SIM, SRM and
    other acquisition-strategy specific types are never returned.
    """
    if ms_level == 1:
        return MassSpectrumType.MS1_SPECTRUM
    return MassSpectrumType.MSN_SPECTRUM
