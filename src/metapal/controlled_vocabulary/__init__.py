"""
PSI-MS controlled-vocabulary type system.

Enumerations:
- SpectrumRepresentationType: Centroid or profile data
- MassSpectrumType: MS1, MSn, SIM, SRM, ...
- MassAnalyzerType: Mass analyzer technology
- ScanPolarityType: Positive or negative scan
- DissociationMethodType: Fragmentation method

Mapping functions translate raw acquisition-library values into these
enumerations.
"""

from .psi_ms_types import (
    DissociationMethodType,
    MassAnalyzerType,
    MassSpectrumType,
    PsiMsTerm,
    ScanPolarityType,
    SpectrumRepresentationType,
)
from .mapping import (
    to_dissociation_method_type,
    to_mass_analyzer_type,
    to_mass_spectrum_type,
    to_scan_polarity_type,
    to_spectrum_representation_type,
)

__all__ = [
    # Enums
    "PsiMsTerm",
    "SpectrumRepresentationType",
    "MassSpectrumType",
    "MassAnalyzerType",
    "ScanPolarityType",
    "DissociationMethodType",
    # Mapping
    "to_mass_analyzer_type",
    "to_dissociation_method_type",
    "to_scan_polarity_type",
    "to_spectrum_representation_type",
    "to_mass_spectrum_type",
]
