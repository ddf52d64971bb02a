import pytest

from metapal.controlled_vocabulary import DissociationMethodType, MassAnalyzerType
from metapal.models import COLUMNS, MsDataScanModel, to_dataframe


def test_columns():
    assert COLUMNS[:3] == ("Id", "DataFileId", "ScanNumber")
    assert "MassSpectrum" not in COLUMNS
    assert len(COLUMNS) == len(set(COLUMNS)) == 25


def test_to_record(ms2_scan):
    record = MsDataScanModel.from_ms_data_scan(ms2_scan, 4).with_id(10).to_record()

    assert tuple(record) == COLUMNS
    assert record["Id"] == 10
    assert record["DataFileId"] == 4
    assert record["MsLevel"] == 2
    assert record["MassSpectrumType"] == "MS:1000580"
    assert record["SpectrumRepresentation"] == "MS:1000127"
    assert record["ScanPolarity"] == "MS:1000129"
    assert record["MassAnalyzerType"] == MassAnalyzerType.ORBITRAP.accession
    assert record["DissociationMethod"] == "MS:1000422"
    assert record["IsolationWindowLowerOffset"] == -1.0
    assert record["PrecursorScanNumber"] == 5
    assert record["NormalizedCollisionEnergy"] == 27.0


def test_to_record_absent_values(make_scan):
    record = MsDataScanModel.from_ms_data_scan(make_scan(), 4).to_record()

    assert record["Id"] is None
    assert record["DissociationMethod"] is None
    assert record["PrecursorScanNumber"] is None


def test_from_record_restores_model(ms2_scan):
    model = MsDataScanModel.from_ms_data_scan(ms2_scan, 4)
    restored = MsDataScanModel.from_record(model.to_record())

    assert restored == model
    assert restored.dissociation_method is DissociationMethodType.BEAM_TYPE_COLLISION_INDUCED_DISSOCIATION
    assert restored.mass_spectrum is None


def test_from_record_missing_optional_columns():
    record = {
        "DataFileId": 1,
        "ScanNumber": 3,
        "SpectrumRepresentation": "MS:1000128",
        "MassSpectrumType": "MS:1000579",
        "MsLevel": 1,
        "MassAnalyzerType": "MS:1000081",
        "ScanPolarity": "MS:1000130",
    }
    model = MsDataScanModel.from_record(record)

    assert model.mass_analyzer_type is MassAnalyzerType.QUADRUPOLE
    assert model.scan_start_time is None
    assert model.id is None


def test_from_record_missing_required_column():
    with pytest.raises(KeyError):
        MsDataScanModel.from_record({"DataFileId": 1, "ScanNumber": 3})


def test_from_record_unknown_accession(ms2_scan):
    record = MsDataScanModel.from_ms_data_scan(ms2_scan, 4).to_record()
    record["MassAnalyzerType"] = "MS:9999999"
    with pytest.raises(ValueError):
        MsDataScanModel.from_record(record)


def test_to_dataframe(make_scan, ms2_scan):
    models = [
        MsDataScanModel.from_ms_data_scan(make_scan(), 4),
        MsDataScanModel.from_ms_data_scan(ms2_scan, 4),
    ]
    frame = to_dataframe(models)

    assert list(frame.columns) == list(COLUMNS)
    assert len(frame) == 2
    assert frame["ScanNumber"].tolist() == [1, 6]
    assert frame["MassSpectrumType"].tolist() == ["MS:1000579", "MS:1000580"]


def test_to_dataframe_empty():
    frame = to_dataframe([])
    assert list(frame.columns) == list(COLUMNS)
    assert frame.empty


def test_to_dataframe_integer_columns(make_scan, ms2_scan):
    models = [
        MsDataScanModel.from_ms_data_scan(make_scan(), 4),
        MsDataScanModel.from_ms_data_scan(ms2_scan, 4).with_id(12),
    ]
    frame = to_dataframe(models)

    for column in ("Id", "DataFileId", "ScanNumber", "MsLevel",
                   "PrecursorScanNumber", "SelectedIonChargeStateGuess"):
        assert frame[column].dtype == "Int64"
    assert frame["PrecursorScanNumber"].isna().tolist() == [True, False]
    assert frame["PrecursorScanNumber"].iloc[1] == 5
    assert frame["SelectedIonChargeStateGuess"].iloc[1] == 2
    assert frame["Id"].iloc[1] == 12


def test_dataframe_rows_restore_models(make_scan, ms2_scan):
    models = [
        MsDataScanModel.from_ms_data_scan(make_scan(), 4),
        MsDataScanModel.from_ms_data_scan(ms2_scan, 4).with_id(12),
    ]
    frame = to_dataframe(models)

    restored = [MsDataScanModel.from_record(row) for row in frame.to_dict("records")]

    assert restored == models
    assert restored[0].dissociation_method is None
    assert restored[0].precursor_scan_number is None
    assert restored[0].id is None
    assert isinstance(restored[1].precursor_scan_number, int)
