from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.rejected_rules import RejectedRuleLog
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ColumnSelection
from ..models.mapping_range import MatchMode
from ..services.orchestrator import ProcessingError, run_mapping
from ..services.summary import render_summary_fields
from ..tabular.reader import TableReadError, detect_default_columns, read_table

"""CLI entrypoint.

Flow:
- Load .env (BARCODE_MAPPER_CONFIG may point at the config file)
- Load and validate the mapping config
- Run the mapping for the input table
- Print the SUMMARY line and map the outcome to an exit code
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_EXPORT_BLOCKED = 2

CONFIG_ENV_VAR = "BARCODE_MAPPER_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="barcode-mapper",
        description="Assign patient ids to specimen rows by tube number or plate column ranges",
    )
    p.add_argument("input", type=Path, help="CSV or .xlsx specimen table")
    p.add_argument("--config", type=Path, default=None, help=f"Mapping config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--mode", choices=[m.value for m in MatchMode], default=None, help="Override the match mode")
    p.add_argument("--tube-column", default=None, help="Tube number column")
    p.add_argument("--column-column", default=None, help="Plate column coordinate column")
    p.add_argument("--row-column", default=None, help="Plate row coordinate column")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for processed_<file>.csv")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, detected columns & first rows then exit")
    return p.parse_args(argv)


def _config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _inspect_data(path: Path) -> int:
    try:
        table = read_table(path)
    except TableReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    detected = detect_default_columns(table.columns)
    print(f"FILE: {table.file_name} rows={len(table.rows)}")
    print(f"  columns={table.columns}")
    print(f"  detected tube={detected.tube} column={detected.column} row={detected.row}")
    for row in table.rows[:INSPECT_SAMPLE_ROWS]:
        print(f"  row {row.row_number}: {row.values}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(args.input)

    _load_env_file(Path(".env"))
    config_path = _config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    override = ColumnSelection(tube=args.tube_column, column=args.column_column, row=args.row_column)
    mode = MatchMode(args.mode) if args.mode else None
    rejections = RejectedRuleLog(source=config_path.name)

    logger.info(f"Processing {args.input} with rules from {config_path}")
    try:
        result = run_mapping(
            args.input,
            cfg,
            columns_override=override,
            mode_override=mode,
            output_directory=args.output_dir,
            rejections=rejections,
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    finally:
        counts = rejections.counts_by_type()
        log_path = rejections.write()
        if log_path is not None:
            by_type = " ".join(f"{k}={v}" for k, v in sorted(counts.items()))
            logger.info(f"rejected rules written to {log_path} ({by_type})")

    log_summary(render_summary_fields(result.summary))

    if not result.summary.exportable:
        return EXIT_EXPORT_BLOCKED
    return EXIT_SUCCESS
