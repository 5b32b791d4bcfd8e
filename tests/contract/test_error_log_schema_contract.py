from __future__ import annotations

import json
from pathlib import Path

from barcode_mapper.cli import main as cli_main

"""Rejected-rule log contract: one JSON object per line, fixed keys."""

EXPECTED_KEYS = {"timestamp", "source", "rule", "error_type", "message"}


def test_overlapping_config_rule_is_logged(write_config: Path, tube_csv: Path, capsys):
    text = write_config.read_text(encoding="utf-8") + (
        "  - start: 1002\n"
        "    end: 1004\n"
        "    patient_id: P2\n"
    )
    write_config.write_text(text, encoding="utf-8")

    code = cli_main([str(tube_csv)])
    out = capsys.readouterr().out

    assert code == 2
    assert "ERROR rule 2 rejected: range 1002-1004 overlaps tube number rule 1001-1003 (P1)" in out
    assert "rejected_rules=1" in out
    assert "(RANGE_OVERLAP=1)" in out

    logs = list(Path("logs").glob("errors-*.log"))
    assert len(logs) == 1
    [line] = logs[0].read_text(encoding="utf-8").splitlines()
    record = json.loads(line)
    assert set(record) == EXPECTED_KEYS
    assert record["source"] == "mapping.yml"
    assert record["rule"] == 2
    assert record["error_type"] == "RANGE_OVERLAP"


def test_no_log_file_without_rejections(write_config: Path, tube_csv: Path):
    cli_main([str(tube_csv)])
    assert not Path("logs").exists()
