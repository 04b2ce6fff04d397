#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from creatorcal.core.types import PART4_NAMES
from creatorcal.engines.dayparts import DEFAULT_SPLIT, clamp_spans, span_hours
from creatorcal.engines.solar import solar_times


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "creatorcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "creatorcal[diagnostics]"') from e


def build_spans(
    np,
    latitude: float,
    *,
    days: int = 366,
    split: float = DEFAULT_SPLIT,
    equinox_day: int = 1,
) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
    """
    Day-part spans across a year.
    Returns (day_of_year[N], spans_hours[N, 4], degenerate[N]).
    """
    doys = np.arange(1, days + 1, dtype=int)
    spans = np.empty((days, 4), dtype=float)
    degenerate = np.zeros(days, dtype=bool)

    for i, doy in enumerate(doys):
        st = solar_times(int(doy), latitude, equinox_day=equinox_day)
        row, clamped = clamp_spans(span_hours(st, split=split))
        spans[i, :] = row
        degenerate[i] = clamped or st.polar is not None
    return doys, spans, degenerate


def summarize(np, spans) -> List[Tuple[str, float, float, float]]:
    """(name, min, mean, max) hours per span."""
    out = []
    for j, name in enumerate(PART4_NAMES):
        col = spans[:, j]
        out.append((name, float(np.min(col)), float(np.mean(col)), float(np.max(col))))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Tabulate (and optionally plot) the 4 day-part spans over a Creator year.")
    p.add_argument("--lat", type=float, default=-26.2, help="Observer latitude in degrees")
    p.add_argument("--split", type=float, default=DEFAULT_SPLIT, help="Share of noon->sunset given to 'day'")
    p.add_argument("--days", type=int, default=366)
    p.add_argument("--plot", default="", help="Output base name; writes <name>.png when given")
    args = p.parse_args(argv)

    np = _need_numpy()
    doys, spans, degenerate = build_spans(np, args.lat, days=args.days, split=args.split)

    print(f"Latitude {args.lat:+.2f} deg, split {args.split:.2f}, {len(doys)} days")
    print(f"{'span':<8}  {'min h':>7}  {'mean h':>7}  {'max h':>7}")
    for name, lo, mean, hi in summarize(np, spans):
        print(f"{name:<8}  {lo:7.3f}  {mean:7.3f}  {hi:7.3f}")
    n_deg = int(np.count_nonzero(degenerate))
    if n_deg:
        print(f"Clamped (polar) days: {n_deg}")

    if args.plot:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
        ax.stackplot(doys, spans.T, labels=PART4_NAMES, alpha=0.8)
        ax.set_xlim(1, len(doys))
        ax.set_ylim(0, 24)
        ax.set_xlabel("Creator day of year")
        ax.set_ylabel("Hours")
        ax.set_title(f"Day-part spans at latitude {args.lat:+.1f} deg")
        ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)
        fig.savefig(args.plot + ".png", dpi=150)
        print(f"Saved: {args.plot}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
