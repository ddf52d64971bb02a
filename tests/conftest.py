import numpy as np
import pytest

from metapal.core import (
    DissociationType,
    MsDataScan,
    MZAnalyzerType,
    MzRange,
    MzSpectrum,
    Polarity,
)


@pytest.fixture
def make_scan():
    """Factory for source scans; keyword arguments override the MS1 defaults."""
    def _make_scan(**overrides) -> MsDataScan:
        fields = dict(
            one_based_scan_number=1,
            msn_order=1,
            is_centroid=False,
            polarity=Polarity.POSITIVE,
            retention_time=1.5,
            mz_analyzer=MZAnalyzerType.ORBITRAP,
            scan_window_range=MzRange(350.0, 1500.0),
            scan_filter="FTMS + p NSI Full ms [350.0000-1500.0000]",
            total_ion_current=2.5e8,
            injection_time=12.5,
            native_id="controllerType=0 controllerNumber=1 scan=1",
            mass_spectrum=MzSpectrum(
                mz=np.array([400.0, 500.0, 600.0]),
                intensity=np.array([10.0, 300.0, 20.0]),
            ),
        )
        fields.update(overrides)
        return MsDataScan(**fields)
    return _make_scan


@pytest.fixture
def ms2_scan(make_scan):
    """HCD MS2 scan fragmenting a precursor from scan 5."""
    return make_scan(
        one_based_scan_number=6,
        msn_order=2,
        is_centroid=True,
        polarity=Polarity.NEGATIVE,
        scan_window_range=MzRange(120.0, 1000.0),
        scan_filter="FTMS - c NSI d Full ms2 500.00@hcd27.00 [120.0000-1000.0000]",
        native_id="controllerType=0 controllerNumber=1 scan=6",
        selected_ion_mz=500.25,
        selected_ion_charge_state_guess=2,
        selected_ion_intensity=1.2e6,
        selected_ion_monoisotopic_guess_mz=499.75,
        isolation_mz=500.0,
        isolation_width=2.0,
        dissociation_type=DissociationType.HCD,
        one_based_precursor_scan_number=5,
        scan_description="27",
    )
