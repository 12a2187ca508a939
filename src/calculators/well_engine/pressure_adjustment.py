# src/calculators/well_engine/pressure_adjustment.py
"""
What-if wellhead pressure.

A WHP change acts on the rod cross section and shifts every hook load by
the same amount:

    ΔF = ΔP · π (d/2)²,   Δm = ΔF / g
"""
import math
from typing import List, Sequence, Optional

from src.calculators.well_engine.models import StitchedPoint, PressureAdjustmentState
from src.calculators.well_engine.units import PA_PER_BAR, GRAVITY


def compute_weight_offset(rod_diameter_cm: float,
                          original_whp: float,
                          adjusted_whp: float) -> float:
    """Weight offset in kg for a WHP change from original to adjusted (bar)."""
    rod_area = math.pi * (rod_diameter_cm / 100 / 2) ** 2  # m²
    pressure_diff = (adjusted_whp - original_whp) * PA_PER_BAR  # Pa
    force_offset = pressure_diff * rod_area  # N
    return force_offset / GRAVITY


def _shift(value: Optional[float], offset: float) -> Optional[float]:
    return value + offset if value is not None else None


def apply_offset(points: Sequence[StitchedPoint], offset: float) -> List[StitchedPoint]:
    """New series with `offset` added to every non-null force field."""
    return [
        StitchedPoint(
            md=p.md,
            rih_standard_1=_shift(p.rih_standard_1, offset),
            rih_tractor=_shift(p.rih_tractor, offset),
            rih_standard_2=_shift(p.rih_standard_2, offset),
            pooh=_shift(p.pooh, offset)
        )
        for p in points
    ]


def adjusted_chart_data(points: Sequence[StitchedPoint],
                        state: PressureAdjustmentState,
                        original_whp: float,
                        rod_diameter_cm: float) -> List[StitchedPoint]:
    if not state.enabled:
        return list(points)
    offset = compute_weight_offset(rod_diameter_cm, original_whp, state.adjusted_whp)
    return apply_offset(points, offset)
