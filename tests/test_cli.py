import json

from execviz.cli import main


def test_cli_prints_yearly_counts(sample_csv, capsys):
    assert main(["--data", sample_csv, "--no-show"]) == 0
    out = capsys.readouterr().out
    assert "Loaded 4 executions from 2000 onward, 3 years." in out
    assert "  2005: 2" in out


def test_cli_save_and_export(sample_csv, tmp_path):
    png = tmp_path / "chart.png"
    counts = tmp_path / "counts.json"
    assert main(["--data", sample_csv, "--no-show", "--save", str(png), "--export", str(counts)]) == 0
    assert png.stat().st_size > 0
    assert json.loads(counts.read_text(encoding="utf-8"))[0] == {"year": 2000, "count": 1}


def test_cli_missing_file_exit_code(capsys):
    assert main(["--data", "/nonexistent/executions.csv", "--no-show"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_invalid_rows(tmp_path, capsys):
    from conftest import ROWS, write_csv
    path = write_csv(tmp_path / "bad.csv", [ROWS[1], ROWS[2].replace(",38,", ",?,")])
    assert main(["--data", path, "--no-show"]) == 1
    assert "row 2" in capsys.readouterr().err
    assert main(["--data", path, "--no-show", "--skip-invalid"]) == 0
    assert "Loaded 1 executions" in capsys.readouterr().out


def test_cli_empty_dataset(empty_csv, tmp_path, capsys):
    png = tmp_path / "empty.png"
    assert main(["--data", empty_csv, "--no-show", "--save", str(png)]) == 0
    assert "0 years" in capsys.readouterr().out
    assert png.exists()


def test_cli_non_ascii_age_is_reported_not_raised(tmp_path, capsys):
    from conftest import ROWS, write_csv
    path = write_csv(tmp_path / "sup.csv", [ROWS[1], ROWS[2].replace(",38,", ",3²,")])
    assert main(["--data", path, "--no-show"]) == 1
    assert "row 2" in capsys.readouterr().err
