"""
Source scan abstraction.

This module defines the acquisition-library view of a scan: the vendor-level
enumerations (analyzer, dissociation, polarity) and the MsDataScan dataclass
that readers produce and the metadata mapper consumes. Values here are raw:
nothing is mapped onto the PSI-MS vocabulary yet.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .spectrum import MzSpectrum


# One-based precursor scan number reported when a scan has no precursor
NO_PRECURSOR = -1


class MZAnalyzerType(Enum):
    """Mass analyzer as reported by the acquisition library."""
    UNKNOWN = auto()
    QUADRUPOLE = auto()
    ION_TRAP_2D = auto()
    ION_TRAP_3D = auto()
    ORBITRAP = auto()
    TOF = auto()
    FTICR = auto()
    SECTOR = auto()
    ASTRAL = auto()


class DissociationType(Enum):
    """Activation method as reported by the acquisition library."""
    UNKNOWN = auto()
    CID = auto()        # Collision-Induced Dissociation
    LOW_CID = auto()    # Low-energy (ion trap) CID
    ISCID = auto()      # In-Source CID
    HCD = auto()        # Higher-energy Collisional Dissociation
    ETD = auto()        # Electron Transfer Dissociation
    ETHCD = auto()      # ETD with supplemental HCD
    ECD = auto()        # Electron Capture Dissociation
    IRMPD = auto()      # Infrared Multiphoton Dissociation
    PQD = auto()        # Pulsed Q Dissociation
    UVPD = auto()       # Ultraviolet Photodissociation
    ANY_ACTIVATION_TYPE = auto()
    CUSTOM = auto()
    AUTODETECT = auto()


class Polarity(Enum):
    """Ion polarity mode."""
    POSITIVE = auto()
    NEGATIVE = auto()
    UNKNOWN = auto()


@dataclass(frozen=True, slots=True)
class MzRange:
    """Closed m/z interval."""
    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(
                f"minimum must be <= maximum, got {self.minimum} > {self.maximum}"
            )

    @property
    def width(self) -> float:
        return self.maximum - self.minimum

    def contains(self, mz: float) -> bool:
        return self.minimum <= mz <= self.maximum


@dataclass(frozen=True, slots=True)
class MsDataScan:
    """
    One acquisition event as exposed by the acquisition library.

    Attributes:
        one_based_scan_number: Ordinal position of the scan in its run.
        msn_order: MS level (1 for MS1, 2 for MS2, etc.).
        is_centroid: True for peak-picked data, False for profile data.
        polarity: Ion polarity mode.
        retention_time: Scan start time in minutes.
        mz_analyzer: Mass analyzer used for this scan.

        # Acquisition details
        scan_window_range: Scanned m/z range.
        scan_filter: Vendor scan filter string.
        total_ion_current: Total ion current (TIC).
        injection_time: Ion injection time in milliseconds.
        native_id: Native spectrum ID from the source file.
        scan_description: Free-text scan description.

        # Precursor information (MS2+ only)
        selected_ion_mz: m/z of the selected precursor ion.
        selected_ion_charge_state_guess: Instrument's charge state guess.
        selected_ion_intensity: Intensity of the selected ion.
        selected_ion_monoisotopic_guess_mz: Monoisotopic m/z guess.
        isolation_mz: Centre of the isolation window.
        isolation_width: Full width of the isolation window in m/z.
        dissociation_type: Activation method, None for MS1 scans.
        one_based_precursor_scan_number: Scan number of the precursor scan,
            or NO_PRECURSOR.

        mass_spectrum: Peak data; not part of the scan's metadata.
    """
    # Required fields
    one_based_scan_number: int
    msn_order: int
    is_centroid: bool
    polarity: Polarity
    retention_time: float  # in minutes
    mz_analyzer: MZAnalyzerType

    # Acquisition details
    scan_window_range: Optional[MzRange] = None
    scan_filter: Optional[str] = None
    total_ion_current: Optional[float] = None
    injection_time: Optional[float] = None  # milliseconds
    native_id: Optional[str] = None
    scan_description: Optional[str] = None

    # Precursor info (for MS2+)
    selected_ion_mz: Optional[float] = None
    selected_ion_charge_state_guess: Optional[int] = None
    selected_ion_intensity: Optional[float] = None
    selected_ion_monoisotopic_guess_mz: Optional[float] = None
    isolation_mz: Optional[float] = None
    isolation_width: Optional[float] = None
    dissociation_type: Optional[DissociationType] = None
    one_based_precursor_scan_number: Optional[int] = NO_PRECURSOR

    mass_spectrum: Optional[MzSpectrum] = None

    def __post_init__(self) -> None:
        """Validate scan consistency."""
        if self.one_based_scan_number < 1:
            raise ValueError(
                f"one_based_scan_number must be >= 1, got {self.one_based_scan_number}"
            )
        if self.msn_order < 1:
            raise ValueError(f"msn_order must be >= 1, got {self.msn_order}")
        if self.isolation_width is not None and self.isolation_width < 0:
            raise ValueError(f"isolation_width must be >= 0, got {self.isolation_width}")

    @property
    def is_ms1(self) -> bool:
        """Check if this is an MS1 scan."""
        return self.msn_order == 1

    @property
    def isolation_range(self) -> Optional[MzRange]:
        """Isolation window as an m/z range, symmetric about isolation_mz."""
        if self.isolation_mz is None or self.isolation_width is None:
            return None
        half_width = self.isolation_width / 2
        return MzRange(self.isolation_mz - half_width, self.isolation_mz + half_width)
