import pytest

from main import main


def test_preview_command(sample_db, tmp_path, capsys):
    main(["preview", str(sample_db), "--csv", str(tmp_path / "p.csv")])
    out = capsys.readouterr().out
    assert "Workdays: 1" in out
    assert "2023-05-15  09:30-17:45  break 30m" in out
    assert (tmp_path / "p.csv").exists()


def test_generate_command(sample_db, tmp_path, capsys):
    output = tmp_path / "out.sql"
    main(["generate", str(sample_db), "--output", str(output)])
    assert "saved to" in capsys.readouterr().out
    assert output.read_text().count("INSERT INTO") == 4


def test_errors_exit_with_message(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["preview", str(tmp_path / "missing.db")])
    assert exc.value.code == 1
    assert "Legacy database file not found" in capsys.readouterr().out


def test_unwritable_output_exits_with_message(sample_db, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["generate", str(sample_db), "--output", str(tmp_path / "nowhere" / "out.sql")])
    assert exc.value.code == 1
    assert "Error: Could not write migration script" in capsys.readouterr().out
