"""Reactor sizing models: Batch, CSTR, PFR and PBR."""

from __future__ import annotations

from reactor_calc.reactors.base import AbstractReactor, ReactorType
from reactor_calc.reactors.batch import BatchReactor
from reactor_calc.reactors.cstr import CSTRReactor, mixed_flow_conversion, mixed_flow_volume
from reactor_calc.reactors.pbr import PackedBedReactor
from reactor_calc.reactors.pfr import PlugFlowReactor

__all__ = [
    "AbstractReactor",
    "BatchReactor",
    "CSTRReactor",
    "PackedBedReactor",
    "PlugFlowReactor",
    "ReactorType",
    "mixed_flow_conversion",
    "mixed_flow_volume",
]
