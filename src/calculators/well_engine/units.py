# src/calculators/well_engine/units.py
"""
Metric/imperial conversions shared by the well engine.
"""
import math
from typing import List, Tuple

from src.calculators.well_engine.models import CasingSection, CasingUnits

FT_TO_M = 0.3048
M_TO_FT = 3.28084
CM_PER_INCH = 2.54
KGM_TO_LBFT = 0.671969
PA_PER_BAR = 1e5
GRAVITY = 9.81               # m/s²
KELVIN_OFFSET = 273.15
HYDROSTATIC_GRADIENT = 0.0981  # bar per meter per SG unit


def cm_to_inch(value: float) -> float:
    return value / CM_PER_INCH


def inch_to_cm(value: float) -> float:
    return value * CM_PER_INCH


def kgm_to_lbft(value: float) -> float:
    return value * KGM_TO_LBFT


def lbft_to_kgm(value: float) -> float:
    return value / KGM_TO_LBFT


def ft_to_m(value: float) -> float:
    return value * FT_TO_M


def m_to_ft(value: float) -> float:
    return value * M_TO_FT


def bar_to_pa(value: float) -> float:
    return value * PA_PER_BAR


def celsius_to_kelvin(value: float) -> float:
    return value + KELVIN_OFFSET


def deg_to_rad(value: float) -> float:
    return value * (math.pi / 180)


def toggle_casing_units(sections: List[CasingSection],
                        units: CasingUnits,
                        key: str) -> Tuple[CasingUnits, List[CasingSection]]:
    """
    Flip one unit family of the architecture table and convert every section.

    Args:
        sections: Current casing sections
        units: Units the sections are currently expressed in
        key: 'depth', 'od', 'id' or 'weight'

    Returns:
        (new units, converted sections)
    """
    # local import, casing imports this module
    from src.calculators.well_engine.casing import calculate_id_from_od_weight

    current = getattr(units, key, None)
    if key == 'depth':
        new_unit, factor = ('ft', M_TO_FT) if current == 'm' else ('m', 1 / M_TO_FT)
    elif key in ('od', 'id'):
        new_unit, factor = ('in', 1 / CM_PER_INCH) if current == 'cm' else ('cm', CM_PER_INCH)
    elif key == 'weight':
        new_unit, factor = ('lb/ft', KGM_TO_LBFT) if current == 'kg/m' else ('kg/m', 1 / KGM_TO_LBFT)
    else:
        raise ValueError(f"Unknown unit family: {key}")

    new_units = CasingUnits(**{**units.to_dict(), key: new_unit})

    converted = []
    for sec in sections:
        if key == 'depth':
            sec = sec.with_changes(start=round(sec.start * factor, 2),
                                   end=round(sec.end * factor, 2))
        elif key == 'od':
            od = round(sec.od * factor, 3)
            new_id = calculate_id_from_od_weight(od, sec.weight, new_unit, units.weight, units.id)
            sec = sec.with_changes(od=od, id=new_id if new_id is not None else sec.id)
        elif key == 'id':
            sec = sec.with_changes(id=round(sec.id * factor, 3))
        else:
            weight = round(sec.weight * factor, 2)
            new_id = calculate_id_from_od_weight(sec.od, weight, units.od, new_unit, units.id)
            sec = sec.with_changes(weight=weight, id=new_id if new_id is not None else sec.id)
        converted.append(sec.with_changes(units=new_units))

    return new_units, converted
