# tests/test_diagnostics.py

import pytest

from creatorcal.core.time import MS_PER_DAY
from creatorcal.diagnostics import year_table


def test_year_table_rows():
    rows = year_table.rows("unix", 1, 8)
    assert [r["days"] for r in rows] == [365, 365, 365, 366, 365, 365, 365, 366]
    assert rows[0]["start"] == 0
    for a, b in zip(rows, rows[1:]):
        assert b["start"] - a["start"] == a["days"] * MS_PER_DAY
        assert a["first_timeless"] - a["start"] == 364 * MS_PER_DAY


def test_year_table_creator_defaults(capsys):
    assert year_table.main([]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[2].startswith("6028")
    assert "2025-03-20T03:20:00.000Z" in out


def test_day_lengths_spans():
    np = pytest.importorskip("numpy")
    from creatorcal.diagnostics import day_lengths

    doys, spans, degenerate = day_lengths.build_spans(np, 0.0, days=30)
    assert doys.shape == (30,)
    assert spans.shape == (30, 4)
    assert np.allclose(spans.sum(axis=1), 24.0)
    assert not degenerate.any()

    _, _, polar = day_lengths.build_spans(np, 89.0)
    assert polar.any()


def test_day_lengths_main(capsys):
    pytest.importorskip("numpy")
    from creatorcal.diagnostics import day_lengths

    assert day_lengths.main(["--lat", "0", "--days", "5"]) == 0
    out = capsys.readouterr().out
    for name in ("morning", "day", "evening", "night"):
        assert name in out


def test_day_lengths_plot(tmp_path, capsys):
    pytest.importorskip("numpy")
    mpl = pytest.importorskip("matplotlib")
    mpl.use("Agg")
    from creatorcal.diagnostics import day_lengths

    base = str(tmp_path / "spans")
    assert day_lengths.main(["--lat", "45", "--days", "20", "--plot", base]) == 0
    assert (tmp_path / "spans.png").exists()
