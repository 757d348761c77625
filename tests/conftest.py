"""
Shared fixtures for the seating tests.
"""
import pytest
from seating.models import StudentRecord, HallRecord


@pytest.fixture
def sample_students():
    """The five-student demo roster."""
    return [
        StudentRecord("S001", "Imraan", "CSE", 5, 3, "Math"),
        StudentRecord("S002", "Rahul", "CSE", 5, 3, "Physics"),
        StudentRecord("S003", "Anjali", "ECE", 5, 3, "Chemistry"),
        StudentRecord("S004", "Sneha", "EEE", 5, 3, "Biology"),
        StudentRecord("S005", "Amit", "MECH", 5, 3, "Math"),
    ]

@pytest.fixture
def sample_hall():
    return HallRecord("Hall-101", 5, 2)

@pytest.fixture
def math_only_students():
    return [
        StudentRecord(f"M{i:02d}", f"Student {i}", "CSE", 3, 2, "Math")
        for i in range(1, 11)
    ]

@pytest.fixture
def balanced_students():
    """Four subjects, two students each, every branch distinct."""
    subjects = ["Biology", "Chemistry", "Math", "Physics"]
    students = []
    for i in range(8):
        subject = subjects[i // 2]
        students.append(StudentRecord(
            f"{subject[0]}{i % 2 + 1}", f"Student {i}", f"BR{i}", 1, 1, subject
        ))
    return students
