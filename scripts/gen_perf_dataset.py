#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates a synthetic biospecimen plate export (CSV or xlsx) plus a matching
mapping config, suitable for timing the barcode-mapper CLI:
- TubeNumber: consecutive tube numbers, with a sprinkling of EMPTY/ERROR slots
- Column / Row: 96-well plate position (12 columns x 8 rows)
- Barcode, Sample: free text carried through to the export
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import yaml

PLATE_ROWS = "ABCDEFGH"
PLATE_COLUMNS = 12


def generate_plate_data(rows: int, first_tube: int = 100000, blank_ratio: float = 0.02, seed: int = 42) -> pd.DataFrame:
    """Generate a plate export with ``rows`` wells.

    Args:
        rows: Number of data rows to generate
        first_tube: Tube number of the first well
        blank_ratio: Share of wells marked EMPTY or ERROR
        seed: Random seed for reproducible data

    Returns:
        DataFrame with string columns only
    """
    rng = np.random.default_rng(seed)
    index = np.arange(rows)
    well = index % (PLATE_COLUMNS * len(PLATE_ROWS))

    tubes = (first_tube + index).astype(str).astype(object)
    # Blank wells: plate scanner reports EMPTY or ERROR instead of a tube number
    blank = rng.random(rows) < blank_ratio
    tubes[blank] = rng.choice(["EMPTY", "ERROR"], size=int(blank.sum()))

    barcodes = rng.integers(10_000_000, 100_000_000, size=rows)
    return pd.DataFrame(
        {
            "TubeNumber": tubes,
            "Column": (well // len(PLATE_ROWS) + 1).astype(str),
            "Row": np.array(list(PLATE_ROWS))[well % len(PLATE_ROWS)],
            "Barcode": [f"BC{b}" for b in barcodes],
            "Sample": [f"S{i + 1:06d}" for i in index],
        }
    )


def build_config(rows: int, patients: int, first_tube: int = 100000) -> dict:
    """Tube-number rules splitting the tube range evenly across ``patients``."""
    width = max(1, rows // patients)
    ranges = []
    for p in range(patients):
        lo = first_tube + p * width
        hi = first_tube + rows - 1 if p == patients - 1 else lo + width - 1
        ranges.append({"start": lo, "end": hi, "patient_id": f"PT-{p + 1:04d}"})
    return {"mode": "tube_number", "output_directory": "./output", "ranges": ranges}


def write_dataset(output_path: Path, rows: int, patients: int, seed: int = 42) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_plate_data(rows, seed=seed)
    if output_path.suffix.lower() == ".xlsx":
        df.to_excel(output_path, index=False, engine="openpyxl")
    else:
        df.to_csv(output_path, index=False)

    config_path = output_path.with_name(output_path.stem + "_mapping.yml")
    with config_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(build_config(rows, patients), f, sort_keys=False)

    print(f"Created dataset: {output_path}")
    print(f"  Rows: {rows}")
    print(f"  Patients: {patients}")
    print(f"  Config: {config_path}")
    return config_path


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic plate exports for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 50k rows split across 100 patients
  %(prog)s data/perf.csv

  # Generate an xlsx export
  %(prog)s data/perf.xlsx --rows 10000 --patients 20
        """,
    )
    parser.add_argument("output", type=Path, help="Output path (.csv or .xlsx)")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of data rows (default: 50000)")
    parser.add_argument("--patients", type=int, default=100, help="Number of patient rules (default: 100)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0 or args.patients <= 0:
        print("Error: --rows and --patients must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".csv", ".xlsx"):
        print("Error: output must end in .csv or .xlsx", file=sys.stderr)
        return 1

    try:
        write_dataset(args.output, args.rows, args.patients, args.seed)
    except OSError as e:
        print(f"Error creating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
