import csv
from pathlib import Path

from revenue_calendar.cli import main

CSV_TEXT = (
    "InvoiceDate,Quantity,UnitPrice,Discount\n"
    "2022-06-25 09:00,2,10,0\n"
    "2022-06-25 09:00,1,5,0.1\n"
    "2022-01-03 14:00,10,10,0\n"
    "garbage,1,1,0\n"
)


def test_cli_prints_summary_and_exports(tmp_path: Path, capsys):
    source = tmp_path / "data.csv"
    source.write_text(CSV_TEXT, encoding="utf-8")
    export = tmp_path / "out.csv"

    code = main([str(source), "--year", "2022", "--export-csv", str(export), "--log-level", "ERROR"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Days with revenue: 2" in out
    assert "Skipped rows: 1" in out
    assert "Revenue: $124.50" in out
    assert "3.1.2022 (week 2): $100.00" in out
    rows = list(csv.DictReader(export.open(encoding="utf-8")))
    assert [row["date"] for row in rows] == ["2022-01-03", "2022-06-25"]


def test_cli_empty_year(tmp_path: Path, capsys):
    source = tmp_path / "data.csv"
    source.write_text(CSV_TEXT, encoding="utf-8")

    code = main([str(source), "--year", "2021", "--log-level", "ERROR"])

    assert code == 0
    assert "No revenue recorded." in capsys.readouterr().out


def test_cli_missing_file(tmp_path: Path, capsys):
    code = main([str(tmp_path / "missing.csv"), "--log-level", "ERROR"])

    assert code == 1
    assert "Load failed" in capsys.readouterr().err
