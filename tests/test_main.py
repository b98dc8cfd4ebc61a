import io
import json
from datetime import date, timedelta

from main import main


def _write_log(tmp_path, events) -> str:
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"events": events}))
    return str(path)


def _week_of_diapers(days: int = 8) -> list[dict]:
    start = date(2018, 1, 1)
    events = []
    for i in range(days):
        day = (start + timedelta(days=i)).isoformat()
        events.append({"type": "diaper", "time": f"{day}T08:00:00", "poo": i % 2 == 0})
        events.append({"type": "diaper", "time": f"{day}T14:00:00"})
        events.append({"type": "bottle", "time": f"{day}T09:00:00", "ounces": 3})
        events.append({"type": "sleep", "start": f"{day}T01:00:00", "end": f"{day}T03:00:00"})
    return events


def test_report_prints_one_block_per_window(tmp_path, capsys):
    path = _write_log(tmp_path, _week_of_diapers(8))

    assert main(["--events", path]) == 0

    out = capsys.readouterr().out
    assert out.startswith("2018-01-07:\nTotal Diapers: 2\n")
    assert "2018-01-08:\n" in out
    assert out.count("Total Diapers:") == 2
    assert "Bottle: 3.0 oz (3.0 oz per session)\n" in out
    assert "Max Sleep: 2h0m0s\n" in out


def test_short_log_prints_nothing(tmp_path, capsys):
    path = _write_log(tmp_path, _week_of_diapers(6))
    assert main(["--events", path]) == 0
    assert capsys.readouterr().out == ""


def test_empty_log_from_stdin_exits_zero(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"events": []}'))
    assert main([]) == 0
    assert capsys.readouterr().out == ""


def test_daily_flag_prints_days_first(tmp_path, capsys):
    path = _write_log(tmp_path, _week_of_diapers(7))
    assert main(["--events", path, "--daily"]) == 0
    out = capsys.readouterr().out
    # seven daily blocks, then the single window labeled by the last day
    assert out.count("Total Diapers:") == 8
    assert out.startswith("2018-01-01:\n")


def test_window_days_option(tmp_path, capsys):
    path = _write_log(tmp_path, _week_of_diapers(3))
    assert main(["--events", path, "--window-days", "2"]) == 0
    assert capsys.readouterr().out.count("Total Diapers:") == 2


def test_output_writes_json(tmp_path):
    path = _write_log(tmp_path, _week_of_diapers(7))
    output = tmp_path / "report.json"

    assert main(["--events", path, "--output", str(output)]) == 0

    report = json.loads(output.read_text())
    assert report["metadata"]["total_days"] == 7
    assert len(report["rolling_means"]) == 1
    assert report["rolling_means"][0]["end_date"] == "2018-01-07"


def test_verbose_goes_to_stderr(tmp_path, capsys):
    path = _write_log(tmp_path, [])
    assert main(["--events", path, "--verbose"]) == 0
    captured = capsys.readouterr()
    assert "Loaded 0 events" in captured.err
    assert captured.out == ""


def test_missing_file_exits_one(tmp_path, capsys):
    assert main(["--events", str(tmp_path / "missing.json")]) == 1
    assert "File Error" in capsys.readouterr().out


def test_bad_record_exits_one(tmp_path, capsys):
    path = _write_log(tmp_path, [{"type": "bottle", "time": "2018-01-01T09:00:00"}])
    assert main(["--events", path]) == 1
    assert "Data Validation Error" in capsys.readouterr().out


def test_bad_structure_exits_one(tmp_path, capsys):
    path = tmp_path / "events.json"
    path.write_text('{"records": []}')
    assert main(["--events", str(path)]) == 1
    assert "Data Structure Error" in capsys.readouterr().out


def test_mixed_timezones_exit_one(tmp_path, capsys):
    path = _write_log(tmp_path, [
        {"type": "diaper", "time": "2018-01-01T09:00:00"},
        {"type": "diaper", "time": "2018-01-01T10:00:00Z"},
    ])
    assert main(["--events", path]) == 1
    assert "Cannot order events" in capsys.readouterr().out
