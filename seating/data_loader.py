"""
seating/data_loader.py

Reads and writes roster/hall files:
  * the tagged record file (STUDENT,... / HALL,... one per line)
  * headered student and hall tables (pandas)
  * the parameter/value run configuration (pandas)
"""

import csv
import os
from typing import Dict, List, Sequence, Tuple
import pandas as pd
from .models import StudentRecord, HallRecord
from . import utils

DEFAULT_RUN_CONFIG: Dict[str, object] = {
    'records_file': os.path.join('data', 'records.csv'),
    'output_dir': 'output',
    'strict_halls': False,
    'export_excel': True,
}


def _student_from_fields(fields: List[str]) -> StudentRecord:
    return StudentRecord(
        roll=fields[1],
        name=fields[2],
        branch=fields[3],
        semester=utils.parse_int(fields[4], utils.DEFAULT_SEMESTER),
        year=utils.parse_int(fields[5], utils.DEFAULT_YEAR),
        subject=fields[6],
    )

def _hall_from_fields(fields: List[str]) -> HallRecord:
    return HallRecord(
        hall_id=fields[1],
        rows=utils.parse_int(fields[2], utils.DEFAULT_HALL_ROWS),
        cols=utils.parse_int(fields[3], utils.DEFAULT_HALL_COLS),
    )

def parse_records(lines) -> Tuple[List[StudentRecord], List[HallRecord]]:
    """
    Parses tagged record lines. Blank lines are ignored; rows with an
    unknown tag or too few fields are skipped with a warning.
    """
    students: List[StudentRecord] = []
    halls: List[HallRecord] = []

    for line_number, fields in enumerate(csv.reader(lines), start=1):
        if not fields or not any(f.strip() for f in fields):
            continue
        tag = fields[0].strip().upper()

        if tag == utils.STUDENT_TAG and len(fields) >= utils.STUDENT_FIELD_COUNT:
            student = _student_from_fields(fields)
            if not student.roll:
                print(f"Warning: Skipping student with empty roll (Line {line_number}): {fields}")
                continue
            students.append(student)
        elif tag == utils.HALL_TAG and len(fields) >= utils.HALL_FIELD_COUNT:
            hall = _hall_from_fields(fields)
            if not hall.hall_id:
                print(f"Warning: Skipping hall with empty id (Line {line_number}): {fields}")
                continue
            halls.append(hall)
        else:
            print(f"Warning: Skipping invalid record row (Line {line_number}): {fields}")

    return students, halls

def load_records(filepath: str) -> Tuple[List[StudentRecord], List[HallRecord]]:
    """
    Reads a tagged record file and returns (students, halls).
    """
    print(f"Loading records from {filepath}...")

    if not os.path.exists(filepath):
        print(f"Fatal Error: Record file not found at {filepath}")
        return [], []

    try:
        with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
            students, halls = parse_records(f)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        print(f"Fatal Error: Could not read record file. {e}")
        return [], []

    print(f"Successfully loaded {len(students)} students and {len(halls)} halls.")
    return students, halls

def save_records(filepath: str, students: Sequence[StudentRecord], halls: Sequence[HallRecord]):
    """Writes students then halls in the tagged record format."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, mode='w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f, lineterminator='\n')
        for s in students:
            writer.writerow([utils.STUDENT_TAG] + s.as_fields())
        for h in halls:
            writer.writerow([utils.HALL_TAG, h.hall_id, h.rows, h.cols])

    print(f"  ✓ Exported {len(students)} students and {len(halls)} halls to {filepath}")


def load_students_table(filepath: str) -> List[StudentRecord]:
    """Load students from a headered CSV (roll,name,branch,semester,year,subject)."""
    students = []
    try:
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
        df.columns = df.columns.str.strip().str.lower()

        for _, row in df.iterrows():
            try:
                roll = str(row['roll']).strip()
                if not roll:
                    continue
                students.append(StudentRecord(
                    roll=roll,
                    name=str(row['name']),
                    branch=str(row['branch']),
                    semester=int(row['semester']),
                    year=int(row['year']),
                    subject=str(row['subject']),
                ))
            except (KeyError, ValueError) as e:
                print(f"⚠ Skipping invalid student row {dict(row)}: {e}")

    except FileNotFoundError:
        print(f"⚠ Warning: {filepath} not found")
    except pd.errors.EmptyDataError:
        print(f"⚠ Warning: {filepath} is empty")

    print(f"✓ Loaded {len(students)} students")
    return students

def load_halls_table(filepath: str) -> List[HallRecord]:
    """Load halls from a headered CSV (hall_id,rows,cols)."""
    halls = []
    try:
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
        df.columns = df.columns.str.strip().str.lower()

        for _, row in df.iterrows():
            try:
                hall_id = str(row['hall_id']).strip()
                if not hall_id:
                    continue
                halls.append(HallRecord(
                    hall_id=hall_id,
                    rows=int(row['rows']),
                    cols=int(row['cols']),
                ))
            except (KeyError, ValueError) as e:
                print(f"⚠ Skipping invalid hall row {dict(row)}: {e}")

    except FileNotFoundError:
        print(f"⚠ Warning: {filepath} not found")
    except pd.errors.EmptyDataError:
        print(f"⚠ Warning: {filepath} is empty")

    print(f"✓ Loaded {len(halls)} halls")
    return halls

def load_run_config(filepath: str) -> Dict[str, object]:
    """Load run settings from a parameter,value CSV, falling back to defaults."""
    config = dict(DEFAULT_RUN_CONFIG)
    try:
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
        df.columns = df.columns.str.strip()

        for _, row in df.iterrows():
            param = str(row['parameter']).strip()
            value = str(row['value']).strip()
            if param not in DEFAULT_RUN_CONFIG:
                print(f"⚠ Ignoring unknown config parameter '{param}'")
                continue
            default = DEFAULT_RUN_CONFIG[param]
            if isinstance(default, bool):
                config[param] = utils.parse_bool(value, default)
            else:
                config[param] = value or default

    except FileNotFoundError:
        print(f"⚠ Warning: {filepath} not found, using default settings")
    except (KeyError, pd.errors.EmptyDataError) as e:
        print(f"⚠ Error loading config: {e}")

    return config
