# tests/test_cli.py

import json

import pytest

from creatorcal import cli


def test_date(capsys):
    assert cli.main(["date", "2025-03-20T12:00:00+02:00"]) == 0
    out = capsys.readouterr().out
    assert "6028-01-01" in out
    assert "6028_01" in out
    assert "5d 17h 20m" in out


def test_date_out_of_time(capsys):
    assert cli.main(["date", "1970-12-31T00:00:00Z", "--engine", "unix"]) == 0
    out = capsys.readouterr().out
    assert "out-of-time day 1" in out


def test_time(capsys):
    assert cli.main(["time", "2025-03-20T05:20:00+02:00"]) == 0
    out = capsys.readouterr().out
    assert "part 1/18, minute 1/80" in out
    assert "morning" in out


def test_solar(capsys):
    assert cli.main(["solar", "--doy", "1", "--lat", "0", "--lon", "0", "--utc-offset", "0"]) == 0
    out = capsys.readouterr().out
    assert "Solar noon 12:00" in out
    assert "Polar" not in out


def test_solar_polar(capsys):
    assert cli.main(["solar", "--doy", "93", "--lat", "89", "--lon", "0", "--utc-offset", "0"]) == 0
    out = capsys.readouterr().out
    assert "Polar day" in out
    assert "[clamped]" in out


def test_state_json(capsys):
    assert cli.main(["state", "1970-01-01T00:00:00Z", "--engine", "unix"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["iso"] == "1970-01-01T00:00:00.000Z"
    assert payload["date"]["year"] == 1
    assert payload["date"]["week_id"] == "1_01"
    assert payload["day_part18"] == 1
    assert payload["status"] == "synced"
    assert set(payload["rings"]) >= {"year", "week", "month", "omer", "creation", "day18", "quadrant", "timeless"}


def test_year_table(capsys):
    assert cli.main(["year-table", "--engine", "unix", "--from-year", "1", "--to-year", "4"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2 + 4
    assert lines[-1].split()[:3] == ["4", "366", "2"]


def test_watch_runs_n_ticks(capsys, monkeypatch):
    monkeypatch.delenv(cli.ENV_TIME_URL, raising=False)
    assert cli.main(["watch", "--engine", "unix", "--ticks", "2"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) >= 2
    assert "part" in lines[0]


def test_bad_timestamp():
    from creatorcal.core.errors import ConfigError

    with pytest.raises(ConfigError):
        cli.main(["date", "yesterday"])
