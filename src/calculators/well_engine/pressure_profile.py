# src/calculators/well_engine/pressure_profile.py
"""
Hydrostatic pressure vs depth for a layered fluid column.

Fluid layers stack from surface downward in declaration order, each
occupying `percent` of the total TVD. Pressure at a depth is

    P(tvd) = WHP + Σ h_i(tvd) · sg_i · 0.0981      [bar]

where h_i is the submerged height of band i above tvd.
"""
import logging
from typing import List, Callable, Sequence, Dict, Any

import numpy as np

from src.calculators.well_engine.models import FluidLayer
from src.calculators.well_engine.units import HYDROSTATIC_GRADIENT

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 50


def fluid_bands(fluids: Sequence[FluidLayer], max_tvd: float) -> List[Dict[str, Any]]:
    """Contiguous TVD bands, top to bottom, one per fluid layer."""
    bands = []
    current_tvd = 0.0
    for fluid in fluids:
        height = (fluid.percent / 100) * max_tvd
        bands.append({
            'fluid': fluid,
            'start_tvd': current_tvd,
            'end_tvd': current_tvd + height
        })
        current_tvd += height
    return bands


def pressure_at_tvd(bands: List[Dict[str, Any]], whp: float, tvd: float) -> float:
    pressure = whp
    for band in bands:
        sg = band['fluid'].sg
        if tvd > band['end_tvd']:
            pressure += (band['end_tvd'] - band['start_tvd']) * sg * HYDROSTATIC_GRADIENT
        elif tvd > band['start_tvd']:
            pressure += (tvd - band['start_tvd']) * sg * HYDROSTATIC_GRADIENT
    return pressure


def compute_pressure_profile(fluids: Sequence[FluidLayer],
                             whp: float,
                             max_md: float,
                             max_tvd: float,
                             get_tvd: Callable[[float], float],
                             steps: int = DEFAULT_STEPS) -> List[Dict[str, float]]:
    """
    Sample the pressure profile from surface to `max_md`.

    Args:
        fluids: Fluid layers, top to bottom
        whp: Wellhead pressure (bar)
        max_md: Deepest MD to sample
        max_tvd: Total TVD the fluid percentages refer to
        get_tvd: MD -> TVD conversion
        steps: Number of equal MD steps

    Returns:
        [{'md', 'pressure'}] with md rounded to 0.1 m and pressure
        to 0.1 bar.
    """
    bands = fluid_bands(fluids, max_tvd)

    if max_md <= 0:
        logger.debug("Pressure profile requested for a well without depth")
        return [{'md': 0.0, 'pressure': round(float(whp), 1)}]

    profile = []
    for md in np.linspace(0.0, max_md, steps + 1):
        tvd = get_tvd(float(md))
        pressure = pressure_at_tvd(bands, whp, tvd)
        profile.append({'md': float(round(md, 1)), 'pressure': round(float(pressure), 1)})
    return profile


def validate_fluid_percentages(fluids: Sequence[FluidLayer], tolerance: float = 0.5) -> Dict[str, Any]:
    """Check the layer heights add up to the full column."""
    total = float(sum(f.percent or 0 for f in fluids))
    return {
        'total': round(total, 1),
        'missing': round(100 - total, 1),
        'is_valid': abs(total - 100) <= tolerance
    }


def percent_from_tvd(tvd_height: float, max_tvd: float) -> float:
    """Band height (m TVD) as a percentage of the column."""
    if max_tvd <= 0:
        return 0.0
    return round((tvd_height / max_tvd) * 100, 2)


def calculate_fluid_interface(top_sg: float,
                              bottom_sg: float,
                              gauge_pressure: float,
                              whp: float,
                              gauge_depth: float,
                              max_tvd: float) -> Dict[str, Any]:
    """
    Interface depth between two fluids from a downhole gauge reading.

        D = (Pg - WHP - sg2·g·Dg) / (g·(sg1 - sg2))

    Args:
        top_sg, bottom_sg: Specific gravity of the upper and lower fluid
        gauge_pressure: Downhole gauge pressure (bar)
        whp: Wellhead pressure (bar)
        gauge_depth: Gauge TVD (m)
        max_tvd: Column height used to express the result as percentages

    Returns:
        {'depth', 'top_percent', 'bottom_percent'} or {'error'} when the
        interface falls outside [0, gauge_depth].

    Raises:
        ValueError: if both fluids have the same density
    """
    if top_sg == bottom_sg:
        raise ValueError("Fluids must have different densities")

    g = HYDROSTATIC_GRADIENT
    depth = (gauge_pressure - whp - (bottom_sg * g * gauge_depth)) / (g * (top_sg - bottom_sg))

    if depth < 0 or depth > gauge_depth:
        return {'error': f"Interface depth out of range: {depth:.1f} m"}

    top_percent = percent_from_tvd(depth, max_tvd)
    return {
        'depth': round(depth, 1),
        'top_percent': top_percent,
        'bottom_percent': round(100 - top_percent, 2)
    }
