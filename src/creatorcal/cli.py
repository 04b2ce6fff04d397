from __future__ import annotations

import argparse
import asyncio
import importlib
import inspect
import json
import logging
import os
import sys
from typing import Any, Dict

ENV_TIME_URL = "CREATORCAL_TIME_URL"
ENV_API_KEY = "CREATORCAL_API_KEY"


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _instant_arg(s: str | None) -> int:
    from creatorcal.core.time import parse_iso_instant, wall_clock_ms

    if not s:
        return wall_clock_ms()
    return parse_iso_instant(s)


def _date_label(d) -> str:
    if d.is_timeless:
        return f"{d.year} out-of-time day {d.timeless_day} (day {d.day_of_year})"
    return f"{d.year}-{d.month:02d}-{d.day_of_month:02d} (day {d.day_of_year}, weekday {d.weekday})"


def _state_dict(st) -> Dict[str, Any]:
    from creatorcal.core.time import format_iso_instant

    d = st.date
    return {
        "instant": st.instant,
        "iso": format_iso_instant(st.instant),
        "authoritative": st.authoritative,
        "status": st.status.value,
        "date": {
            "year": d.year,
            "month": d.month,
            "day_of_month": d.day_of_month,
            "day_of_year": d.day_of_year,
            "weekday": d.weekday,
            "week_id": d.week_id,
        },
        "day_part18": st.day_part18,
        "creator_time": {"part": st.creator_time.part, "minute": st.creator_time.minute},
        "day_part4": {
            "part": st.day_part4.part,
            "name": st.day_part4.name,
            "angles": st.day_part4.angles.as_dict(),
            "degenerate": st.day_part4.degenerate,
        },
        "rings": {**st.rings.as_dict(), "timeless_active": st.rings.timeless_active},
    }


def cmd_date(argv: list[str]) -> int:
    import creatorcal

    p = argparse.ArgumentParser(prog="creatorcal date", description="Instant -> Creator calendar date")
    p.add_argument("instant", nargs="?", help="ISO-8601 timestamp with offset (default: now)")
    p.add_argument("--engine", default="creator")
    args = p.parse_args(argv)

    t = _instant_arg(args.instant)
    d = creatorcal.calendar_date(t, engine=args.engine)
    days, hours, minutes = creatorcal.time_until_week_end(t, engine=args.engine)

    print(_date_label(d))
    print(f"week {d.week_id}, {days}d {hours}h {minutes}m until week end")
    return 0


def cmd_time(argv: list[str]) -> int:
    import creatorcal
    from creatorcal.engines.dayparts import hand_angle

    p = argparse.ArgumentParser(prog="creatorcal time", description="Instant -> 18-part and 4-part time of day")
    p.add_argument("instant", nargs="?", help="ISO-8601 timestamp with offset (default: now)")
    p.add_argument("--engine", default="creator")
    args = p.parse_args(argv)

    t = _instant_arg(args.instant)
    ct = creatorcal.creator_time(t, engine=args.engine)
    p4 = creatorcal.day_part4(t, engine=args.engine)

    print(f"part {ct.part}/18, minute {ct.minute}/80 (hand at {hand_angle(ct):.2f} deg)")
    flag = " [clamped]" if p4.degenerate else ""
    print(f"{p4.name} ({p4.part}/4){flag}")
    for name, deg in p4.angles.as_dict().items():
        print(f"  {name:<8} {deg:8.3f} deg")
    return 0


def cmd_solar(argv: list[str]) -> int:
    from creatorcal.engines.dayparts import DEFAULT_SPLIT, clamp_spans, span_hours
    from creatorcal.engines.solar import solar_times

    p = argparse.ArgumentParser(prog="creatorcal solar", description="Approximate sunrise, solar noon and sunset.")
    p.add_argument("--doy", type=int, default=1, help="Creator day of year (day 1 = March equinox)")
    p.add_argument("--lat", type=float, default=-26.2, help="Observer latitude in degrees")
    p.add_argument("--lon", type=float, default=28.0, help="Observer longitude in degrees (positive East)")
    p.add_argument("--utc-offset", type=float, default=2.0, help="Local clock offset from UTC in hours")
    p.add_argument("--split", type=float, default=DEFAULT_SPLIT)
    args = p.parse_args(argv)

    st = solar_times(args.doy, args.lat, longitude=args.lon, utc_offset_hours=args.utc_offset)

    def fmt_time(h: float) -> str:
        m = int(round((h % 24.0) * 60.0)) % 1440
        return f"{m // 60:02d}:{m % 60:02d}"

    print(f"Day {args.doy} at lat {args.lat:+.2f}, lon {args.lon:+.2f}, UTC{args.utc_offset:+g}")
    if st.polar is not None:
        print(f"  Polar {st.polar}: sun does not rise or set")
    print(f"  Sunrise    {fmt_time(st.sunrise)}")
    print(f"  Solar noon {fmt_time(st.solar_noon)}")
    print(f"  Sunset     {fmt_time(st.sunset)}")
    print(f"  Daylight   {st.day_length:.3f} h")

    spans, degenerate = clamp_spans(span_hours(st, split=args.split))
    print("Day-part spans (hours):" + (" [clamped]" if degenerate else ""))
    for name, h in zip(("morning", "day", "evening", "night"), spans):
        print(f"  {name:<8} {h:7.3f}")
    return 0


def cmd_state(argv: list[str]) -> int:
    import creatorcal

    p = argparse.ArgumentParser(prog="creatorcal state", description="Full engine state as JSON")
    p.add_argument("instant", nargs="?", help="ISO-8601 timestamp with offset (default: now)")
    p.add_argument("--engine", default="creator")
    args = p.parse_args(argv)

    st = creatorcal.state_at(_instant_arg(args.instant), engine=args.engine, authoritative=args.instant is not None)
    print(json.dumps(_state_dict(st), indent=2))
    return 0


async def _watch(args: argparse.Namespace) -> None:
    import creatorcal
    from creatorcal.sync.source import HttpTimeSource, SystemTimeSource

    if args.url:
        source = HttpTimeSource(args.url, api_key=args.api_key)
    else:
        source = SystemTimeSource()

    done = asyncio.Event()
    seen = 0

    def consumer(st) -> None:
        nonlocal seen
        seen += 1
        ct = st.creator_time
        print(
            f"{_date_label(st.date)}  part {ct.part:>2}.{ct.minute:02d}  "
            f"{st.day_part4.name:<8} [{st.status.value}]",
            flush=True,
        )
        if args.ticks and seen >= args.ticks:
            done.set()

    sched = creatorcal.make_scheduler(source, consumer, engine=args.engine, reduced_motion=args.reduced_motion)
    await sched.start()
    try:
        await done.wait()
    finally:
        await sched.stop()
        if isinstance(source, HttpTimeSource):
            await source.aclose()


def cmd_watch(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="creatorcal watch", description="Run the live clock and print each tick")
    p.add_argument("--engine", default="creator")
    p.add_argument("--url", default=os.environ.get(ENV_TIME_URL), help=f"Time endpoint (default: ${ENV_TIME_URL})")
    p.add_argument("--api-key", default=os.environ.get(ENV_API_KEY), help=f"API key (default: ${ENV_API_KEY})")
    p.add_argument("--reduced-motion", action="store_true", help="Tick once a minute instead of every 100 ms")
    p.add_argument("--ticks", type=int, default=0, help="Stop after N ticks (0 = run until interrupted)")
    args = p.parse_args(argv)

    try:
        asyncio.run(_watch(args))
    except KeyboardInterrupt:
        pass
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="creatorcal", description="Creator calendar engine CLI.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("date", help="Instant -> Creator calendar date")
    sub.add_parser("time", help="Instant -> 18-part and 4-part time of day")
    sub.add_parser("solar", help="Approximate sunrise, solar noon and sunset for a day of year")
    sub.add_parser("state", help="Full engine state for an instant, as JSON")
    sub.add_parser("watch", help="Run the clock-synchronised scheduler and print ticks")

    # diagnostics
    sub.add_parser("year-table", help="Print year starts, lengths and out-of-time days (diagnostics)")
    sub.add_parser("day-lengths", help="Tabulate day-part spans over a year (needs numpy; matplotlib for --plot)")

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.cmd == "date":
        return cmd_date(rest)

    if args.cmd == "time":
        return cmd_time(rest)

    if args.cmd == "solar":
        return cmd_solar(rest)

    if args.cmd == "state":
        return cmd_state(rest)

    if args.cmd == "watch":
        return cmd_watch(rest)

    if args.cmd == "year-table":
        return _run_module_main("creatorcal.diagnostics.year_table", rest)

    if args.cmd == "day-lengths":
        return _run_module_main("creatorcal.diagnostics.day_lengths", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
