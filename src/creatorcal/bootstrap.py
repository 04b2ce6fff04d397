from __future__ import annotations
from typing import Mapping

from creatorcal.core.engine import EngineRegistry
from creatorcal.core.types import EngineSpec
from creatorcal.engines.specs import ALL_SPECS
from creatorcal.engines.factory import make_engine

def build_registry(specs: Mapping[str, EngineSpec] = ALL_SPECS) -> EngineRegistry:
    """One CreatorEngine per preset, keyed by preset name."""
    return EngineRegistry({name: make_engine(spec) for name, spec in specs.items()})
