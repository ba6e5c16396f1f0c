"""
Check USIs in a CSV File

Runs the local USI checksum pre-check over one column of a CSV export (e.g.
a student import) and reports rows that would be rejected before any
registry call.

Usage:
    cd apps/api
    python scripts/check_usi_csv.py students.csv --column usi

Exit code is 1 if any row fails the pre-check.
"""

import argparse
import csv
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rto_api.core.checksum import ChecksumOutcome, check_identifier


def check_file(path: Path, column: str) -> int:
    """Check every row of ``path`` and return the number of failures."""
    failures = 0
    total = 0

    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None or column not in reader.fieldnames:
            print(f"Column '{column}' not found in {path}")
            sys.exit(2)

        # Row 1 is the header
        for row_number, row in enumerate(reader, start=2):
            total += 1
            value = (row.get(column) or "").strip()
            outcome = check_identifier(value)
            if outcome is not ChecksumOutcome.VALID:
                failures += 1
                print(f"  row {row_number}: {value!r} -> {outcome.value}")

    print(f"Checked {total} rows: {total - failures} valid, {failures} invalid")
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description="Pre-check USIs in a CSV file")
    parser.add_argument("csv_file", type=Path, help="CSV file with a header row")
    parser.add_argument("--column", default="usi", help="Name of the USI column (default: usi)")
    args = parser.parse_args()

    failures = check_file(args.csv_file, args.column)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
