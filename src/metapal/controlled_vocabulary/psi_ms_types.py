"""
PSI-MS controlled-vocabulary enumerations.

Each enumeration corresponds to one PSI-MS parent term and each member to one
of its children. Member values are ``(accession, term name)`` pairs taken from
the psi-ms.obo release, so a member can be written to and read back from any
store that records CV accessions.

The complete ontology is published at
https://github.com/HUPO-PSI/psi-ms-CV/blob/master/psi-ms.obo
"""

from enum import Enum


class PsiMsTerm(Enum):
    """Base for enumerations whose values are PSI-MS ``(accession, name)`` pairs."""

    @property
    def accession(self) -> str:
        """CV accession, e.g. ``"MS:1000484"``."""
        return self.value[0]

    @property
    def term_name(self) -> str:
        """CV term name, e.g. ``"orbitrap"``."""
        return self.value[1]

    @classmethod
    def from_accession(cls, accession: str) -> 'PsiMsTerm':
        """
        Look up a member by its CV accession.

        Raises:
            ValueError: If no member carries the accession.
        """
        for member in cls:
            if member.accession == accession:
                return member
        raise ValueError(f"{accession!r} is not a valid {cls.__name__} accession")

    def __str__(self) -> str:
        return f"{self.accession}|{self.term_name}"


class SpectrumRepresentationType(PsiMsTerm):
    """
    MS:1000525 spectrum representation.

    Way in which the spectrum is represented, either with regularly spaced
    data points or with a list of centroided peaks.
    """
    CENTROID = ("MS:1000127", "centroid spectrum")
    PROFILE = ("MS:1000128", "profile spectrum")


class MassSpectrumType(PsiMsTerm):
    """MS:1000559 spectrum type. Defines a spectrum as MS1, MSn, etc."""
    MS1_SPECTRUM = ("MS:1000579", "MS1 spectrum")
    MSN_SPECTRUM = ("MS:1000580", "MSn spectrum")
    CRM_SPECTRUM = ("MS:1000581", "CRM spectrum")
    SIM_SPECTRUM = ("MS:1000582", "SIM spectrum")
    SRM_SPECTRUM = ("MS:1000583", "SRM spectrum")
    PRECURSOR_ION_SPECTRUM = ("MS:1000341", "precursor ion spectrum")
    CONSTANT_NEUTRAL_GAIN_SPECTRUM = ("MS:1000325", "constant neutral gain spectrum")
    CONSTANT_NEUTRAL_LOSS_SPECTRUM = ("MS:1000326", "constant neutral loss spectrum")
    E2_MASS_SPECTRUM = ("MS:1000328", "e/2 mass spectrum")
    ENHANCED_MULTIPLY_CHARGED_SPECTRUM = ("MS:1000789", "enhanced multiply charged spectrum")
    TIME_DELAYED_FRAGMENTATION_SPECTRUM = ("MS:1000790", "time-delayed fragmentation spectrum")


class MassAnalyzerType(PsiMsTerm):
    """
    MS:1000443 mass analyzer type.

    Mass analyzer separates the ions according to their mass-to-charge ratio.
    """
    QUADRUPOLE = ("MS:1000081", "quadrupole")
    LINEAR_ION_TRAP = ("MS:1000291", "linear ion trap")
    QUADRUPOLE_ION_TRAP = ("MS:1000082", "quadrupole ion trap")
    ORBITRAP = ("MS:1000484", "orbitrap")
    TIME_OF_FLIGHT = ("MS:1000084", "time-of-flight")
    FOURIER_TRANSFORM_ION_CYCLOTRON_RESONANCE = (
        "MS:1000079", "fourier transform ion cyclotron resonance mass spectrometer"
    )
    MAGNETIC_SECTOR = ("MS:1000080", "magnetic sector")
    ASTRAL = ("MS:1003379", "asymmetric track lossless time-of-flight analyzer")


class ScanPolarityType(PsiMsTerm):
    """
    MS:1000465 scan polarity.

    Relative orientation of the electromagnetic field during the selection
    and detection of ions in the mass spectrometer.
    """
    NEGATIVE_SCAN = ("MS:1000129", "negative scan")
    POSITIVE_SCAN = ("MS:1000130", "positive scan")


class DissociationMethodType(PsiMsTerm):
    """
    MS:1000044 dissociation method.

    Fragmentation method used for dissociation or fragmentation.
    """
    COLLISION_INDUCED_DISSOCIATION = ("MS:1000133", "collision-induced dissociation")
    LOW_ENERGY_COLLISION_INDUCED_DISSOCIATION = (
        "MS:1000433", "low-energy collision-induced dissociation"
    )
    IN_SOURCE_COLLISION_INDUCED_DISSOCIATION = (
        "MS:1001880", "in-source collision-induced dissociation"
    )
    BEAM_TYPE_COLLISION_INDUCED_DISSOCIATION = (
        "MS:1000422", "beam-type collision-induced dissociation"
    )
    ELECTRON_TRANSFER_DISSOCIATION = ("MS:1000598", "electron transfer dissociation")
    ELECTRON_TRANSFER_HIGHER_ENERGY_COLLISION_DISSOCIATION = (
        "MS:1002631", "electron transfer/higher-energy collision dissociation"
    )
    ELECTRON_CAPTURE_DISSOCIATION = ("MS:1000250", "electron capture dissociation")
    INFRARED_MULTIPHOTON_DISSOCIATION = ("MS:1000262", "infrared multiphoton dissociation")
    PULSED_Q_DISSOCIATION = ("MS:1000599", "pulsed q dissociation")
    ULTRAVIOLET_PHOTODISSOCIATION = ("MS:1003246", "ultraviolet photodissociation")
