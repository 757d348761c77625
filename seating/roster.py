"""
seating/roster.py

The editable roster: students and halls kept in entry order, with every
edit recorded in an undo/redo history. Allocation runs on a snapshot, so
the engine never sees later edits.
"""

from dataclasses import replace
from typing import List, Optional, Tuple
from .models import StudentRecord, HallRecord, AllocationResult
from .errors import DataIntegrityError
from .history import Command, CommandHistory
from .data_loader import load_records, save_records
from .placer import allocate
from . import utils


class RosterBook:
    def __init__(self):
        self._students: List[StudentRecord] = []
        self._halls: List[HallRecord] = []
        self.history = CommandHistory()

    # --- Lookups ---

    @property
    def students(self) -> List[StudentRecord]:
        return list(self._students)

    @property
    def halls(self) -> List[HallRecord]:
        return list(self._halls)

    def _student_index(self, roll: str) -> int:
        for i, s in enumerate(self._students):
            if s.roll == roll:
                return i
        return -1

    def _hall_index(self, hall_id: str) -> int:
        for i, h in enumerate(self._halls):
            if h.hall_id == hall_id:
                return i
        return -1

    def find_student(self, roll: str) -> Optional[StudentRecord]:
        index = self._student_index(roll)
        return self._students[index] if index >= 0 else None

    def find_hall(self, hall_id: str) -> Optional[HallRecord]:
        index = self._hall_index(hall_id)
        return self._halls[index] if index >= 0 else None

    def search(self, query: str) -> List[StudentRecord]:
        """Case-insensitive substring match on any student field."""
        needle = query.strip().lower()
        if not needle:
            return self.students
        return [s for s in self._students
                if any(needle in field.lower() for field in s.as_fields())]

    # --- Student edits ---

    def add_student(self, student: StudentRecord) -> Command:
        if self._student_index(student.roll) >= 0:
            raise DataIntegrityError("roll codes", [student.roll])
        return self.history.execute(Command(
            label=f"Add student {student.roll}",
            forward=lambda: self._students.append(student),
            inverse=lambda: self._students.pop(self._student_index(student.roll)),
        ))

    def update_student(self, student: StudentRecord) -> Command:
        """Replaces the record stored under the same roll."""
        index = self._student_index(student.roll)
        if index < 0:
            raise KeyError(student.roll)
        before = self._students[index]

        def _put(record):
            self._students[self._student_index(record.roll)] = record

        return self.history.execute(Command(
            label=f"Update student {student.roll}",
            forward=lambda: _put(student),
            inverse=lambda: _put(before),
        ))

    def remove_student(self, roll: str) -> Command:
        index = self._student_index(roll)
        if index < 0:
            raise KeyError(roll)
        removed = self._students[index]
        return self.history.execute(Command(
            label=f"Delete student {roll}",
            forward=lambda: self._students.pop(self._student_index(roll)),
            inverse=lambda: self._students.insert(index, removed),
        ))

    def duplicate_student(self, roll: str) -> Command:
        original = self.find_student(roll)
        if original is None:
            raise KeyError(roll)
        return self.add_student(replace(original, roll=roll + utils.DUPLICATE_SUFFIX))

    # --- Hall edits ---

    def add_hall(self, hall: HallRecord) -> Command:
        if self._hall_index(hall.hall_id) >= 0:
            raise DataIntegrityError("hall codes", [hall.hall_id])
        return self.history.execute(Command(
            label=f"Add hall {hall.hall_id}",
            forward=lambda: self._halls.append(hall),
            inverse=lambda: self._halls.pop(self._hall_index(hall.hall_id)),
        ))

    def update_hall(self, hall: HallRecord) -> Command:
        index = self._hall_index(hall.hall_id)
        if index < 0:
            raise KeyError(hall.hall_id)
        before = self._halls[index]

        def _put(record):
            self._halls[self._hall_index(record.hall_id)] = record

        return self.history.execute(Command(
            label=f"Update hall {hall.hall_id}",
            forward=lambda: _put(hall),
            inverse=lambda: _put(before),
        ))

    def remove_hall(self, hall_id: str) -> Command:
        index = self._hall_index(hall_id)
        if index < 0:
            raise KeyError(hall_id)
        removed = self._halls[index]
        return self.history.execute(Command(
            label=f"Delete hall {hall_id}",
            forward=lambda: self._halls.pop(self._hall_index(hall_id)),
            inverse=lambda: self._halls.insert(index, removed),
        ))

    # --- Undo / redo ---

    def undo(self) -> Optional[str]:
        command = self.history.undo()
        return command.label if command else None

    def redo(self) -> Optional[str]:
        command = self.history.redo()
        return command.label if command else None

    # --- Files ---

    def import_records(self, filepath: str) -> Tuple[int, int]:
        """
        Adds every new student and hall from a tagged record file as a single
        undoable edit. Keys already present are skipped.
        Returns (students added, halls added).
        """
        students, halls = load_records(filepath)

        new_students: List[StudentRecord] = []
        seen_rolls = {s.roll for s in self._students}
        for s in students:
            if s.roll in seen_rolls:
                print(f"Warning: Skipping duplicate roll {s.roll}")
                continue
            seen_rolls.add(s.roll)
            new_students.append(s)

        new_halls: List[HallRecord] = []
        seen_halls = {h.hall_id for h in self._halls}
        for h in halls:
            if h.hall_id in seen_halls:
                print(f"Warning: Skipping duplicate hall {h.hall_id}")
                continue
            seen_halls.add(h.hall_id)
            new_halls.append(h)

        def _forward():
            self._students.extend(new_students)
            self._halls.extend(new_halls)

        def _inverse():
            added_rolls = {s.roll for s in new_students}
            added_halls = {h.hall_id for h in new_halls}
            self._students = [s for s in self._students if s.roll not in added_rolls]
            self._halls = [h for h in self._halls if h.hall_id not in added_halls]

        self.history.execute(Command(
            label=f"Import {len(new_students)} students, {len(new_halls)} halls",
            forward=_forward,
            inverse=_inverse,
        ))
        print(f"Imported {len(new_students)} students, {len(new_halls)} halls.")
        return len(new_students), len(new_halls)

    def export_records(self, filepath: str):
        save_records(filepath, self._students, self._halls)

    # --- Allocation ---

    def allocate(self, strict: bool = False) -> AllocationResult:
        return allocate(self.students, self.halls, strict=strict)
