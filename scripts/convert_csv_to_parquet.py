#!/usr/bin/env python3
"""Convert a csv fruits file to parquet format.

Usage:
    python scripts/convert_csv_to_parquet.py /path/to/fruits.csv
    python scripts/convert_csv_to_parquet.py /path/to/fruits.csv /path/to/output.parquet
    python scripts/convert_csv_to_parquet.py /path/to/fruits.csv --compression snappy
"""

import argparse
import sys
from pathlib import Path

REQUIRED_COLUMNS = ["type", "variety", "price"]


def main():
    parser = argparse.ArgumentParser(description="Convert csv to parquet")
    parser.add_argument("input_file", type=Path, help="Path to input csv file")
    parser.add_argument(
        "output_file",
        type=Path,
        nargs="?",
        default=None,
        help="Path to output parquet file (default: same name with .parquet)",
    )
    parser.add_argument(
        "--compression",
        choices=["zstd", "snappy", "gzip", "lz4", "none"],
        default="zstd",
        help="Compression algorithm (default: zstd)",
    )
    args = parser.parse_args()

    input_file: Path = args.input_file
    output_file: Path = args.output_file
    compression: str = args.compression

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        sys.exit(1)

    if input_file.suffix.lower() != ".csv":
        print("Error: Input file must be a csv file (.csv)")
        sys.exit(1)

    if output_file is None:
        output_file = input_file.with_suffix(".parquet")

    # Import polars here to avoid slow startup if args are wrong
    import polars as pl

    print(f"Loading {input_file}...")
    df = pl.read_csv(input_file)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        print(f"Warning: missing columns {missing}; set group_column and value_column in a config profile")

    print(f"Loaded {len(df):,} rows, {len(df.columns)} columns")

    compression_arg = "uncompressed" if compression == "none" else compression
    print(f"Writing to {output_file} with {compression} compression...")
    df.write_parquet(output_file, compression=compression_arg)

    print("\nConversion complete!")
    print(f"  Input:  {input_file.stat().st_size:,} bytes")
    print(f"  Output: {output_file.stat().st_size:,} bytes")
    print("\nUpdate your .env file:")
    print(f"  FRUITS_PATH={output_file.absolute()}")


if __name__ == "__main__":
    main()
