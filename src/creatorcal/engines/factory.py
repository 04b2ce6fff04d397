"""
creatorcal.engines.factory
--------------------------
Turns EngineSpec payloads into CreatorEngine objects.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from creatorcal.core.types import EngineSpec, LocationSpec
from creatorcal.engines.orchestrator import CreatorEngine


def make_engine(spec: EngineSpec) -> CreatorEngine:
    """The universal entry point."""
    if not isinstance(spec, EngineSpec):
        raise TypeError(f"Unknown spec type: {type(spec)}")
    return CreatorEngine(spec)


def with_location(spec: EngineSpec, location: Optional[LocationSpec]) -> EngineSpec:
    """Same spec, different observer. None leaves the spec untouched."""
    if location is None:
        return spec
    return replace(spec, location=location)
