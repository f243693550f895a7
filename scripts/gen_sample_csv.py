#!/usr/bin/env python3
"""Sample CSV generation for bulk import performance testing.

Generates a CSV file for one entity type with a parameterized number of rows.
Rows are derived from the entity's template rows with a numeric suffix on
unique fields, then a share of rows is made invalid (blank required field)
and another share duplicates an earlier unique value. The header row matches
the entity's import columns.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from bulk_import.export.writer import format_cell
from bulk_import.models.field_schema import EntitySchema
from bulk_import.schemas.registry import UnknownEntityError, get_entity_schema


def _unique_value(value: str, i: int) -> str:
    if "@" in value:
        local, domain = value.split("@", 1)
        return f"{local}.{i}@{domain}"
    return f"{value} {i}"


def generate_sample_frame(
    schema: EntitySchema,
    rows: int,
    invalid_ratio: float = 0.05,
    duplicate_ratio: float = 0.02,
    seed: int = 42,
) -> pd.DataFrame:
    """Build a DataFrame of string cells shaped like an import file.

    Args:
        schema: Entity schema providing columns and template rows
        rows: Number of data rows
        invalid_ratio: Share of rows whose first required field is blanked
        duplicate_ratio: Share of rows repeating the first row's unique value
        seed: Random seed for reproducible data
    """
    rng = np.random.default_rng(seed)
    templates = schema.template_rows or ({c: "x" for c in schema.columns},)
    unique_cols = {f.name for f in schema.unique_fields}
    # suffixing one column of a composite key keeps the combination distinct
    unique_cols.update(key.fields[-1] for key in schema.unique_together)

    data: list[list[str]] = []
    for i in range(rows):
        tpl = templates[i % len(templates)]
        cells = []
        for col in schema.columns:
            value = format_cell(tpl.get(col))
            if col in unique_cols and value:
                value = _unique_value(value, i)
            cells.append(value)
        data.append(cells)
    df = pd.DataFrame(data, columns=schema.columns, dtype=str)

    if rows > 1:
        candidates = np.arange(1, rows)
        required = [f.name for f in schema.fields if f.required]
        n_invalid = int(rows * invalid_ratio)
        if required and n_invalid:
            idx = rng.choice(candidates, size=min(n_invalid, len(candidates)), replace=False)
            df.loc[idx, required[0]] = ""
        n_dup = int(rows * duplicate_ratio)
        if unique_cols and n_dup:
            if schema.unique_fields:
                cols = [schema.unique_fields[0].name]
            else:
                cols = list(schema.unique_together[0].fields)
            idx = rng.choice(candidates, size=min(n_dup, len(candidates)), replace=False)
            for col in cols:
                df.loc[idx, col] = df.loc[0, col]
    return df


def write_sample_csv(output_path: Path, df: pd.DataFrame) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False, lineterminator="\n")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate sample CSV files for bulk import performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 50k job roles with default error ratios
  %(prog)s job_roles.csv --entity job_role

  # clean file (no invalid or duplicate rows)
  %(prog)s degrees.csv --entity degree --rows 10000 --invalid-ratio 0 --duplicate-ratio 0
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--entity", default="job_role", help="Entity type (default: job_role)")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of data rows (default: 50,000)")
    parser.add_argument("--invalid-ratio", type=float, default=0.05, help="Share of rows with a blank required field")
    parser.add_argument("--duplicate-ratio", type=float, default=0.02, help="Share of rows duplicating a unique value")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing the file")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    for name in ("invalid_ratio", "duplicate_ratio"):
        if not 0 <= getattr(args, name) <= 1:
            print(f"Error: --{name.replace('_', '-')} must be between 0 and 1", file=sys.stderr)
            return 1
    try:
        schema = get_entity_schema(args.entity)
    except UnknownEntityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Entity: {schema.name} columns={','.join(schema.columns)}")
    print(f"  Rows: {args.rows:,} (+ 1 header row)")
    print(f"  Invalid ratio: {args.invalid_ratio}  Duplicate ratio: {args.duplicate_ratio}")
    print(f"  Random seed: {args.seed}")
    if args.dry_run:
        print("\n[DRY RUN] Would generate the file but not creating it.")
        return 0

    df = generate_sample_frame(schema, args.rows, args.invalid_ratio, args.duplicate_ratio, args.seed)
    write_sample_csv(args.output, df)
    print(f"\nCreated CSV file: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
