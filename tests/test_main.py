"""
tests/test_main.py

End-to-end run of the command-line entry point.
"""
import main


def test_main_writes_outputs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    records = tmp_path / "records.csv"
    records.write_text(
        "STUDENT,S001,Imraan,CSE,5,3,Math\n"
        "STUDENT,S002,Rahul,CSE,5,3,Physics\n"
        "HALL,Hall-101,2,2\n"
        "HALL,Broken,0,3\n",
        encoding="utf-8",
    )
    out_dir = tmp_path / "out"

    assert main.main(["main.py", str(records), str(out_dir)]) == 0
    assert (out_dir / main.SEATING_WORKBOOK).exists()
    assert (out_dir / main.SEAT_LIST_FILE).exists()

def test_main_without_students(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    records = tmp_path / "records.csv"
    records.write_text("HALL,Hall-101,2,2\n", encoding="utf-8")

    assert main.main(["main.py", str(records), str(tmp_path / "out")]) == 1
    assert "No students found" in capsys.readouterr().out

def test_main_duplicate_rolls(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    records = tmp_path / "records.csv"
    records.write_text(
        "STUDENT,S001,Imraan,CSE,5,3,Math\n"
        "STUDENT,S001,Again,CSE,5,3,Math\n"
        "HALL,Hall-101,2,2\n",
        encoding="utf-8",
    )
    assert main.main(["main.py", str(records), str(tmp_path / "out")]) == 1
    assert "Cannot allocate" in capsys.readouterr().out

def test_main_exports_hall_with_bracketed_id(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    records = tmp_path / "records.csv"
    records.write_text(
        "STUDENT,S001,Imraan,CSE,5,3,Math\n"
        "HALL,Room[2],1,1\n",
        encoding="utf-8",
    )
    out_dir = tmp_path / "out"

    assert main.main(["main.py", str(records), str(out_dir)]) == 0
    assert (out_dir / main.SEATING_WORKBOOK).exists()
