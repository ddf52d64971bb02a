import logging

import pytest

from metapal.core import DissociationType, MZAnalyzerType
from metapal.exceptions import UnsupportedInstrumentValue
from metapal.models import (
    ConversionOptions,
    ErrorPolicy,
    MsDataScanModel,
    convert_scans,
)


@pytest.fixture
def scans(make_scan):
    return [
        make_scan(one_based_scan_number=1),
        make_scan(
            one_based_scan_number=2,
            msn_order=2,
            dissociation_type=DissociationType.CUSTOM,
            native_id="scan=2",
        ),
        make_scan(
            one_based_scan_number=3,
            msn_order=2,
            dissociation_type=DissociationType.HCD,
            one_based_precursor_scan_number=1,
        ),
    ]


def test_converts_all_scans(make_scan):
    scans = [make_scan(one_based_scan_number=n) for n in (1, 2, 5)]
    result = convert_scans(scans, data_file_id=3)

    assert result.success
    assert result.data_file_id == 3
    assert result.n_converted == 3
    assert [model.scan_number for model in result.models] == [1, 2, 5]
    assert all(model.data_file_id == 3 for model in result.models)


def test_failing_scan_is_skipped(scans, caplog):
    with caplog.at_level(logging.WARNING, logger="metapal.models.conversion"):
        result = convert_scans(scans, data_file_id=3)

    assert not result.success
    assert result.n_converted == 2
    assert result.n_failed == 1
    assert [model.scan_number for model in result.models] == [1, 3]

    failure = result.failures[0]
    assert failure.scan_number == 2
    assert failure.native_id == "scan=2"
    assert isinstance(failure.error, UnsupportedInstrumentValue)
    assert "Skipping scan 2" in caplog.text


def test_failure_does_not_affect_other_scans(scans):
    result = convert_scans(scans, data_file_id=3)
    expected = MsDataScanModel.from_ms_data_scan(scans[2], 3)

    assert result.models[1] == expected
    assert result.models[1].precursor_scan_number == 1


def test_raise_policy(scans):
    with pytest.raises(UnsupportedInstrumentValue):
        convert_scans(scans, data_file_id=3, options=ConversionOptions(on_error=ErrorPolicy.RAISE))


def test_unsupported_analyzer_is_reported(make_scan):
    scans = [make_scan(mz_analyzer=MZAnalyzerType.UNKNOWN)]
    result = convert_scans(scans, data_file_id=1)

    assert result.models == []
    assert result.failures[0].error.attribute == "mass analyzer"


@pytest.mark.parametrize("numbers", [(1, 1), (2, 1)])
def test_scan_numbers_must_increase(make_scan, numbers):
    scans = [make_scan(one_based_scan_number=n) for n in numbers]
    with pytest.raises(ValueError):
        convert_scans(scans, data_file_id=1)


def test_empty():
    result = convert_scans([], data_file_id=1)
    assert result.success
    assert result.models == []


def test_scan_without_usable_isolation_width_does_not_stop_batch(make_scan):
    scans = [
        make_scan(one_based_scan_number=1),
        make_scan(
            one_based_scan_number=2,
            msn_order=2,
            isolation_mz=500.0,
            isolation_width=float("nan"),
            dissociation_type=DissociationType.HCD,
            one_based_precursor_scan_number=1,
        ),
        make_scan(one_based_scan_number=3),
    ]
    result = convert_scans(scans, data_file_id=3)

    assert result.success
    assert [model.scan_number for model in result.models] == [1, 2, 3]
    assert result.models[1].isolation_window_lower_offset is None
    assert result.models[1].isolation_window_upper_offset is None
    assert result.models[1].isolation_window_target_mz == 500.0


def test_invalid_scan_is_skipped(make_scan, monkeypatch):
    scans = [make_scan(one_based_scan_number=n) for n in (1, 2, 3)]
    original = MsDataScanModel.from_ms_data_scan.__func__

    def from_ms_data_scan(cls, scan, data_file_id):
        if scan.one_based_scan_number == 2:
            raise ValueError("isolation window offsets must be symmetric")
        return original(cls, scan, data_file_id)

    monkeypatch.setattr(MsDataScanModel, "from_ms_data_scan", classmethod(from_ms_data_scan))
    result = convert_scans(scans, data_file_id=3)

    assert [model.scan_number for model in result.models] == [1, 3]
    assert [failure.scan_number for failure in result.failures] == [2]
    assert not isinstance(result.failures[0].error, UnsupportedInstrumentValue)
