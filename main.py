"""
main.py

Main entry point for the Exam Seating Allocator.

    python main.py [records_file] [output_dir]

Loads students and halls from a tagged record file, allocates seats,
validates the result and exports the seating plan.
"""

import os
import sys
from typing import List
from seating.data_loader import load_records, load_run_config
from seating.errors import SeatingError
from seating.exporter import SeatingExporter
from seating.placer import allocate
from seating.validators import validate_allocation

# --- Configuration ---
DATA_DIR = "data"
CONFIG_FILE = os.path.join(DATA_DIR, "seating_config.csv")

SEATING_WORKBOOK = "Seating_Plan.xlsx"
SEAT_LIST_FILE = "Seat_List.csv"


def main(argv: List[str]) -> int:
    print("=" * 70)
    print("EXAM SEATING ALLOCATOR".center(70))
    print("=" * 70)

    config = load_run_config(CONFIG_FILE)
    records_file = argv[1] if len(argv) > 1 else config['records_file']
    output_dir = argv[2] if len(argv) > 2 else config['output_dir']

    print("\n📂 Loading data...")
    students, halls = load_records(records_file)

    if not students:
        print("\n❌ No students found! Add STUDENT rows to the record file.")
        return 1
    if not halls:
        print("\n⚠ No halls found. Every student will be reported as unplaced.")

    try:
        result = allocate(students, halls, strict=config['strict_halls'])
    except SeatingError as e:
        print(f"\n❌ Cannot allocate: {e}")
        return 1

    is_valid = validate_allocation(result, students)

    exporter = SeatingExporter(result)
    for hall in result.halls:
        print("\n" + exporter.render_hall(hall.hall_id))

    if result.unplaced:
        print(f"\n⚠ {len(result.unplaced)} students could not be seated:")
        for s in result.unplaced:
            print(f"    - {s}")

    print("\n📊 Exporting seating plan...")
    os.makedirs(output_dir, exist_ok=True)
    if config['export_excel']:
        exporter.export_excel(os.path.join(output_dir, SEATING_WORKBOOK))
    exporter.export_seat_list(os.path.join(output_dir, SEAT_LIST_FILE))

    summary = result.summary()
    print("\n" + "=" * 70)
    print("✓ SEATING ALLOCATION COMPLETE!".center(70))
    print("=" * 70)
    print(f"  Placed:      {summary['placed']}/{summary['total_students']}")
    print(f"  Seats used:  {summary['utilization']}% of {summary['total_seats']}")
    print(f"  Relaxations: {summary['soft']} soft, {summary['fallback']} fallback")
    print(f"\nLocation: {output_dir}/")

    return 0 if is_valid else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
