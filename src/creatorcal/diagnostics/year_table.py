from __future__ import annotations

import argparse
from typing import List

import creatorcal
from creatorcal.core.time import format_iso_instant
from creatorcal.engines.calendar import day_start_instant
from creatorcal.engines.leap import year_length


def rows(engine: str, from_year: int, to_year: int) -> List[dict]:
    spec = creatorcal.get_engine(engine).spec.calendar
    out = []
    for Y in range(from_year, to_year + 1):
        n = year_length(Y, spec.leap_rule)
        out.append({
            "year": Y,
            "days": n,
            "timeless_days": n - 364,
            "start": day_start_instant(Y, 1, spec),
            "first_timeless": day_start_instant(Y, 365, spec),
        })
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print year starts, lengths and out-of-time days.")
    p.add_argument("--engine", default="creator")
    p.add_argument("--from-year", type=int, default=None)
    p.add_argument("--to-year", type=int, default=None)
    args = p.parse_args(argv)

    first = creatorcal.get_engine(args.engine).spec.calendar.first_year
    Y0 = args.from_year if args.from_year is not None else first
    Y1 = args.to_year if args.to_year is not None else Y0 + 11
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    header = f"{'Year':<6}  {'Days':>4}  {'OOT':>3}  {'Day 1 starts':<24}  {'Out-of-time from':<24}"
    print(header)
    print("-" * len(header))
    for r in rows(args.engine, Y0, Y1):
        print(
            f"{r['year']:<6}  {r['days']:>4}  {r['timeless_days']:>3}  "
            f"{format_iso_instant(r['start']):<24}  {format_iso_instant(r['first_timeless']):<24}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
