# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from barcode_mapper.logging.init import reset_logging
from barcode_mapper.models.row_data import RowData


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "output").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """mode: tube_number
columns:
  tube: TubeNumber
  column: Column
  row: Row
output_directory: ./output
ranges:
  - start: 1001
    end: 1003
    patient_id: P1
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "mapping.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    lines = [",".join(header)] + [",".join(r) for r in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def tube_csv(temp_workdir: Path) -> Path:
    """Tubes 1000..1005 on plate column 1..6, row A."""
    rows = [[str(1000 + i), str(i + 1), "A", f"S{i}"] for i in range(6)]
    return write_csv(temp_workdir / "data" / "tubes.csv", ["TubeNumber", "Column", "Row", "Sample"], rows)


def make_rows(*tube_values: str, tube_column: str = "TubeNumber") -> list[RowData]:
    return [RowData(row_number=i + 1, values={tube_column: v}) for i, v in enumerate(tube_values)]
