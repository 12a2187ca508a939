# src/calculators/well_engine/casing.py
"""
Casing inner diameter from OD and linear weight.

Inverse of the steel tubular weight relation

    W [lb/ft] = 2.67 * (OD² - ID²)   (OD, ID in inches)
"""
import logging
import math
from typing import Optional, List

from src.calculators.well_engine.models import CasingSection, CasingUnits
from src.calculators.well_engine.units import cm_to_inch, inch_to_cm, kgm_to_lbft

logger = logging.getLogger(__name__)

STEEL_WEIGHT_FACTOR = 2.67  # lb/ft per in² of steel cross section

_NUMERIC_FIELDS = ('start', 'end', 'od', 'weight', 'id',
                   'fric_rod_rih', 'fric_rod_pooh', 'fric_tool_rih', 'fric_tool_pooh')


def calculate_id_from_od_weight(od: Optional[float],
                                weight: Optional[float],
                                unit_od: str,
                                unit_weight: str,
                                unit_id: str) -> Optional[float]:
    """
    Derive casing ID from OD and linear weight.

    Args:
        od: Outer diameter in `unit_od` ('in' or 'cm')
        weight: Linear weight in `unit_weight` ('lb/ft' or 'kg/m')
        unit_od, unit_weight: Units of the inputs
        unit_id: Unit of the result ('in' or 'cm')

    Returns:
        ID rounded to 3 decimals, or None when the inputs are not positive
        or the weight is too high for the OD.
    """
    if not od or not weight or od <= 0 or weight <= 0:
        return None

    od_inch = od if unit_od == 'in' else cm_to_inch(od)
    weight_lbft = weight if unit_weight == 'lb/ft' else kgm_to_lbft(weight)

    id_sq = od_inch * od_inch - weight_lbft / STEEL_WEIGHT_FACTOR
    if id_sq <= 0:
        logger.warning(f"Weight {weight} {unit_weight} too high for OD {od} {unit_od}")
        return None

    id_inch = math.sqrt(id_sq)
    result = id_inch if unit_id == 'in' else inch_to_cm(id_inch)
    return round(result, 3)


def update_casing_section(section: CasingSection, field: str, value) -> CasingSection:
    """
    Return a copy of `section` with one numeric field edited.

    Changing od or weight recomputes id (the old id stays when the solver
    gives None). Editing id leaves od and weight alone.
    """
    if field not in _NUMERIC_FIELDS:
        raise ValueError(f"Unknown casing field: {field}")

    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if math.isnan(number):
        number = 0.0

    updated = section.with_changes(**{field: number})

    if field in ('od', 'weight'):
        units = updated.units
        new_id = calculate_id_from_od_weight(updated.od, updated.weight, units.od, units.weight, units.id)
        if new_id is not None:
            updated = updated.with_changes(id=new_id)

    return updated


def new_casing_section(sections: List[CasingSection], units: CasingUnits) -> CasingSection:
    """Blank section starting where the last one ends."""
    start = sections[-1].end if sections else 0.0
    return CasingSection(start=start, units=units)


def sections_exceed_depth(sections: List[CasingSection], max_depth: float) -> bool:
    return any(s.end > max_depth or s.start > max_depth for s in sections)
