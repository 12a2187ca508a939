# src/calculators/well_engine/export_values.py
"""
Numeric fields consumed by the project-file exporter.

Only the values are produced here; formatting them into the export
document is the exporter's job.
"""
from typing import List, Sequence, Dict, Any, Optional

from src.calculators.well_engine.models import (
    SurveyStation, CasingSection, TemperaturePoint, FluidLayer, FluidType, RodProperties, ToolElement
)
from src.calculators.well_engine.trajectory import calculate_trajectory
from src.calculators.well_engine.units import deg_to_rad, bar_to_pa, celsius_to_kelvin

OPEN_HOLE_RADIUS = 0.1     # m
OPEN_HOLE_FRICTION = 0.25

FLUID_MOVEMENTS = {'Shut-in': 'ShutIn', 'Flow': 'Flowing', 'Injection': 'Injection'}

# rod defaults: cm, kg/m, GPa
ROD_DIAMETER = 1.2
ROD_LINEAR_MASS = 0.225
ROD_YOUNGS_MODULUS = 125.0
ROD_FLUID_FRICTION = 0.04
ROD_WALL_FRICTION = 0.2

STUFFING_BOX_FORCE = 100.0
STUFFING_BOX_FRICTION = 0.2


def trajectory_export_rows(stations: Sequence[SurveyStation]) -> List[Dict[str, float]]:
    """
    One row per survey station with angles in radians.

    Stations are joined to the trajectory by exact MD; a station whose
    interval was skipped gets zero position.
    """
    by_md = {p.md: p for p in calculate_trajectory(stations)}
    rows = []
    for station in stations:
        calc = by_md.get(station.md)
        rows.append({
            'md': station.md,
            'incl': deg_to_rad(station.inc),
            'az': deg_to_rad(station.azi),
            'tvd': calc.tvd if calc else 0.0,
            'north': -calc.z if calc else 0.0,
            'east': calc.x if calc else 0.0
        })
    return rows


def casing_export_rows(sections: Sequence[CasingSection], max_depth: float) -> List[Dict[str, float]]:
    """
    Casing rows with radius in meters (ID in cm / 200).

    Without an architecture a single open-hole section down to max_depth
    is returned.
    """
    if not sections:
        return [{
            'shoe_depth': max_depth,
            'depth_from': 0.0,
            'radius': OPEN_HOLE_RADIUS,
            'mu_rod_rih': OPEN_HOLE_FRICTION,
            'mu_rod_pooh': OPEN_HOLE_FRICTION,
            'mu_tool_rih': OPEN_HOLE_FRICTION,
            'mu_tool_pooh': OPEN_HOLE_FRICTION
        }]

    return [{
        'shoe_depth': sec.end,
        'depth_from': sec.start,
        'radius': (sec.id or 0.0) / 200.0,
        'mu_rod_rih': sec.fric_rod_rih or 1.0,
        'mu_rod_pooh': sec.fric_rod_pooh or 1.0,
        'mu_tool_rih': sec.fric_tool_rih or 0.3,
        'mu_tool_pooh': sec.fric_tool_pooh or 0.3
    } for sec in sections]


def surface_pressure_pa(whp: Optional[float]) -> float:
    return bar_to_pa(whp or 0.0)


def temperature_table(rows: Sequence[TemperaturePoint]) -> Dict[str, List[float]]:
    """MD and Kelvin columns for rows that have both values."""
    usable = [r for r in rows if r.md is not None and r.temp is not None]
    return {
        'md': [r.md for r in usable],
        'temperature_k': [celsius_to_kelvin(r.temp) for r in usable]
    }


def fluid_movement(scenario: Optional[str]) -> str:
    return FLUID_MOVEMENTS.get(scenario, 'ShutIn')


def fluid_export_values(fluids: Sequence[FluidLayer]) -> Dict[str, float]:
    """
    Fraction (0-1) and density (kg/m³) per fluid type.

    The first layer of each type is used; a missing type exports zeros.
    """
    values = {}
    for fluid_type in FluidType:
        layer = next((f for f in fluids if f.type is fluid_type), None)
        key = fluid_type.value.lower()
        values[f'{key}_fraction'] = (layer.percent / 100) if layer else 0.0
        values[f'{key}_density'] = (layer.sg * 1000) if layer else 0.0
    return values


def rod_export_values(rod: Optional[RodProperties]) -> Dict[str, float]:
    """Rod values in SI units. Zero or unset entries take the defaults."""
    rod = rod or RodProperties()
    return {
        'radius': (rod.diameter or ROD_DIAMETER) / 200,
        'linear_mass': rod.weight or ROD_LINEAR_MASS,
        'young_modulus': (rod.youngs or ROD_YOUNGS_MODULUS) * 1e9,
        'fluid_friction': rod.fluid_fric or ROD_FLUID_FRICTION,
        'rih_friction': rod.rih_fric or ROD_WALL_FRICTION,
        'pooh_friction': rod.pooh_fric or ROD_WALL_FRICTION
    }


def stuffing_box_export_values(force: Optional[float] = None,
                               friction: Optional[float] = None) -> Dict[str, float]:
    return {
        'contact_force': force or STUFFING_BOX_FORCE,
        'friction': friction or STUFFING_BOX_FRICTION
    }


def tool_string_export_rows(tools: Sequence[ToolElement]) -> List[Dict[str, Any]]:
    """Tool string elements with radius in meters (OD in cm / 200)."""
    return [{
        'name': tool.name,
        'length': tool.length,
        'radius': tool.od / 200,
        'mass': tool.weight,
        'is_tractor': tool.is_tractor,
        'traction_force': tool.tractor_force,
        'fluid_friction': tool.fric_fluid or 0.4,
        'rih_friction': tool.fric_rih or 1.0,
        'pooh_friction': tool.fric_pooh or 1.0,
        'has_centralizer': tool.is_centralizer,
        'centralizer_max_od': tool.cent_max_od,
        'centralizer_force': tool.cent_force
    } for tool in tools]


def export_values(stations: Sequence[SurveyStation],
                  sections: Sequence[CasingSection],
                  whp: Optional[float],
                  temperatures: Sequence[TemperaturePoint],
                  target_depth: Optional[float] = None,
                  fluids: Sequence[FluidLayer] = (),
                  scenario: Optional[str] = None,
                  rod: Optional[RodProperties] = None,
                  tools: Sequence[ToolElement] = (),
                  stuffing_box: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    max_depth = max([s.md for s in stations] + [0.0])
    stuffing_box = stuffing_box or {}
    return {
        'max_depth': max_depth,
        'target_md': target_depth or max_depth,
        'md_for_downhole_pressure': max_depth,
        'trajectory': trajectory_export_rows(stations),
        'casing': casing_export_rows(sections, max_depth),
        'surface_pressure_pa': surface_pressure_pa(whp),
        'temperature_table': temperature_table(temperatures),
        'fluid_movement': fluid_movement(scenario),
        'fluids': fluid_export_values(fluids),
        'rod': rod_export_values(rod),
        'stuffing_box': stuffing_box_export_values(stuffing_box.get('force'), stuffing_box.get('friction')),
        'tool_string': tool_string_export_rows(tools)
    }
