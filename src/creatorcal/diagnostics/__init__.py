"""Diagnostics package.

- year_table: always available, plain-text table of year starts and leap years
- day_lengths: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["year_table", "day_lengths"]
