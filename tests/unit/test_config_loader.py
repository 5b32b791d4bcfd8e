from __future__ import annotations
import pytest
from pathlib import Path
import yaml

from barcode_mapper.config.loader import ConfigError, TextScalarLoader, load_config, parse_config
from barcode_mapper.models.config_models import ColumnSelection
from barcode_mapper.models.mapping_range import MatchMode
from barcode_mapper.services.matcher import match_value
from barcode_mapper.services.orchestrator import build_state


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.mode is MatchMode.BY_TUBE_NUMBER
    assert cfg.columns == ColumnSelection(tube="TubeNumber", column="Column", row="Row")
    assert cfg.output_directory == "./output"
    assert len(cfg.ranges) == 1
    rule = cfg.ranges[0]
    # unquoted numbers stay as typed
    assert (rule.start, rule.end, rule.patient_id, rule.mode) == ("1001", "1003", "P1", None)


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg = temp_workdir / "config" / "mapping.yml"
    cfg.write_text("ranges: [\n  - start: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg)
    assert "invalid yaml" in str(e.value)


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    cfg = temp_workdir / "config" / "mapping.yml"
    cfg.write_text("", encoding="utf-8")
    loaded = load_config(cfg)
    assert loaded.mode is MatchMode.BY_TUBE_NUMBER
    assert loaded.columns == ColumnSelection()
    assert loaded.output_directory == "."
    assert loaded.ranges == []


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_range_missing_patient_id(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("    patient_id: P1\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_unknown_mode(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("mode: tube_number", "mode: well")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_parse_config_per_rule_mode_and_non_string_values():
    cfg = parse_config(
        {
            "mode": "column",
            "ranges": [
                {"start": 1, "end": 6.5, "patient_id": "P1"},
                {"start": "BC-01", "end": "BC-09", "patient_id": 42, "mode": "tube_number"},
            ],
        }
    )
    assert cfg.mode is MatchMode.BY_COLUMN
    assert (cfg.ranges[0].start, cfg.ranges[0].end) == ("1", "6.5")
    assert cfg.ranges[1].mode is MatchMode.BY_TUBE_NUMBER
    assert cfg.ranges[1].patient_id == "42"


def test_load_config_keeps_bounds_as_typed(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "mapping.yml"
    cfg_path.write_text(
        "ranges:\n"
        "  - {start: 0100, end: 0199, patient_id: P1}\n"
        "  - {start: 1001.50, end: 1001.90, patient_id: 007}\n"
        "  - start: 12:30\n"
        "    end: 12:45\n"
        "    patient_id: P3\n",
        encoding="utf-8",
    )
    cfg = load_config(cfg_path)
    assert [(r.start, r.end, r.patient_id) for r in cfg.ranges] == [
        ("0100", "0199", "P1"),
        ("1001.50", "1001.90", "007"),
        ("12:30", "12:45", "P3"),
    ]


def test_leading_zero_bounds_match_only_their_tubes(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "mapping.yml"
    cfg_path.write_text("ranges:\n  - {start: 0100, end: 0199, patient_id: P1}\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    state, rejected = build_state(cfg, ColumnSelection(tube="TubeNumber"))
    assert rejected == []
    assert match_value("0150", state.ranges, MatchMode.BY_TUBE_NUMBER).patient_id == "P1"
    assert match_value("0070", state.ranges, MatchMode.BY_TUBE_NUMBER) is None


def test_text_scalar_loader_leaves_safe_loader_untouched():
    assert yaml.load("n: 0100", Loader=TextScalarLoader) == {"n": "0100"}
    assert yaml.safe_load("n: 0100") == {"n": 64}
    assert yaml.load("flag: null", Loader=TextScalarLoader) == {"flag": None}


def test_parse_config_rejects_non_mapping_root():
    with pytest.raises(ConfigError):
        parse_config(["not", "a", "mapping"])  # type: ignore[arg-type]
