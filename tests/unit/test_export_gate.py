from __future__ import annotations

import pytest

from barcode_mapper.models.config_models import ColumnSelection
from barcode_mapper.models.processed_row import ProcessedRow
from barcode_mapper.models.row_data import RowData
from barcode_mapper.services.export_gate import (
    PATIENT_ID_COLUMN,
    build_export,
    can_export,
    export_columns,
    export_file_name,
)

COLUMNS = ColumnSelection(tube="TubeNumber")


def _row(tube: str, pid: str = "", excluded: bool = False, **extra: str) -> ProcessedRow:
    return ProcessedRow(RowData(1, {"TubeNumber": tube, **extra}), patient_id=pid, excluded=excluded)


def test_can_export_requires_every_included_row_mapped():
    rows = [_row("1000", "P1"), _row("EMPTY", excluded=True), _row("1001")]
    assert can_export(rows) is False
    rows[2] = _row("1001", "P1")
    assert can_export(rows) is True


def test_can_export_ignores_excluded_rows():
    assert can_export([_row("ERROR", excluded=True)]) is True


def test_can_export_vacuous_for_no_rows():
    assert can_export([]) is True


def test_build_export_drops_excluded_and_appends_patient_id():
    rows = [
        _row("1000", "P1", Sample="S0"),
        _row("EMPTY", excluded=True, Sample="S1"),
        _row("1001", "P2", Sample="S2"),
    ]
    exported = build_export(rows, COLUMNS)
    assert exported == [
        {"TubeNumber": "1000", "Sample": "S0", PATIENT_ID_COLUMN: "P1"},
        {"TubeNumber": "1001", "Sample": "S2", PATIENT_ID_COLUMN: "P2"},
    ]
    assert list(exported[0].keys()) == ["TubeNumber", "Sample", PATIENT_ID_COLUMN]


def test_build_export_drops_blank_tube_even_if_not_flagged():
    rows = [_row("  ", "P1"), _row("1000", "P1")]
    assert len(build_export(rows, COLUMNS)) == 1


@pytest.mark.parametrize("barcode", ["EMPTY", " error "])
def test_build_export_checks_literal_barcode_column(barcode):
    rows = [_row("1000", "P1", Barcode=barcode), _row("1001", "P1", Barcode="BC-1")]
    exported = build_export(rows, COLUMNS)
    assert [r["TubeNumber"] for r in exported] == ["1001"]


def test_build_export_overwrites_existing_patient_id_column():
    rows = [_row("1000", "P1", **{"Patient ID": "old"})]
    assert build_export(rows, COLUMNS)[0][PATIENT_ID_COLUMN] == "P1"


def test_export_columns_appends_once():
    assert export_columns(["A", "B"]) == ["A", "B", PATIENT_ID_COLUMN]
    assert export_columns(["A", PATIENT_ID_COLUMN]) == ["A", PATIENT_ID_COLUMN]


@pytest.mark.parametrize(
    "name, expected",
    [("run1.csv", "processed_run1.csv"), ("plate.xlsx", "processed_plate.csv"), ("data/x.CSV", "processed_x.CSV")],
)
def test_export_file_name(name, expected):
    assert export_file_name(name) == expected
