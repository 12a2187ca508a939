# src/calculators/well_engine/trajectory.py
"""
Minimum curvature trajectory and MD/TVD lookups.
"""
import logging
from math import sin, cos, tan, acos, radians
from typing import List, Sequence, Optional, Dict, Any

from src.calculators.well_engine.models import SurveyStation, TrajectoryPoint, TemperaturePoint
from src.calculators.well_engine.survey_parser import parse_number

logger = logging.getLogger(__name__)

STRAIGHT_HOLE_DOGLEG = 1e-4  # rad; below this the ratio factor is 1


def calculate_trajectory(stations: Sequence[SurveyStation]) -> List[TrajectoryPoint]:
    """
    Compute 3D positions with the minimum curvature method.

    Args:
        stations: Survey stations in ascending MD order

    Returns:
        A surface point at md=0 followed by one point per accepted
        station. Pairs with non-increasing MD are skipped.
        x=east, y=-tvd, z=-north.
    """
    if not stations:
        return []

    north = east = tvd = 0.0
    trajectory = [TrajectoryPoint(md=0.0, tvd=0.0, north=0.0, east=0.0, x=0.0, y=0.0, z=0.0)]

    for p1, p2 in zip(stations, stations[1:]):
        if p2.md <= p1.md:
            logger.debug(f"Skipping survey interval {p1.md} -> {p2.md}: non-increasing MD")
            continue

        dm = p2.md - p1.md
        i1, i2 = radians(p1.inc), radians(p2.inc)
        a1, a2 = radians(p1.azi), radians(p2.azi)

        # dogleg
        cos_dl = cos(i2 - i1) - sin(i1) * sin(i2) * (1 - cos(a2 - a1))
        dl = acos(max(-1.0, min(1.0, cos_dl)))

        rf = 1.0
        if dl > STRAIGHT_HOLE_DOGLEG:
            rf = (2 / dl) * tan(dl / 2)

        north += (dm / 2) * (sin(i1) * cos(a1) + sin(i2) * cos(a2)) * rf
        east += (dm / 2) * (sin(i1) * sin(a1) + sin(i2) * sin(a2)) * rf
        tvd += (dm / 2) * (cos(i1) + cos(i2)) * rf

        trajectory.append(TrajectoryPoint(
            md=p2.md, tvd=tvd, north=north, east=east,
            x=east, y=-tvd, z=-north
        ))

    return trajectory


def interpolate(x: float, xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Piecewise-linear lookup of y at x.

    The first interval of `xs` containing x wins, so a non-monotonic `xs`
    returns the first match. Outside the domain the boundary y is returned,
    an empty domain gives 0.
    """
    if not xs:
        return 0.0

    for i in range(len(xs) - 1):
        if xs[i] <= x <= xs[i + 1]:
            span = xs[i + 1] - xs[i]
            if span == 0:
                return ys[i]
            ratio = (x - xs[i]) / span
            return ys[i] + ratio * (ys[i + 1] - ys[i])

    if x < xs[0]:
        return ys[0]
    if x > xs[-1]:
        return ys[-1]
    return 0.0


class DepthConverter:
    """
    MD <-> TVD conversion for one well.

    Station MDs are paired index-for-index with the computed trajectory
    TVDs. get_md assumes TVD increases with MD; wells that turn back up
    get whichever interval matches first.
    """

    def __init__(self, stations: Sequence[SurveyStation],
                 trajectory: Optional[Sequence[TrajectoryPoint]] = None):
        self.stations = list(stations)
        self.trajectory = list(trajectory) if trajectory is not None else calculate_trajectory(self.stations)
        # skipped intervals shorten the trajectory; pair up to the shorter list
        n = min(len(self.stations), len(self.trajectory))
        self.survey_md = [s.md for s in self.stations[:n]]
        self.survey_tvd = [p.tvd for p in self.trajectory[:n]]

    @property
    def max_md(self) -> float:
        return max(self.survey_md + [0.0])

    @property
    def max_tvd(self) -> float:
        return max(self.survey_tvd) if self.survey_tvd else 0.0

    def get_tvd(self, md: float) -> float:
        return interpolate(md, self.survey_md, self.survey_tvd)

    def get_md(self, tvd: float) -> float:
        return interpolate(tvd, self.survey_tvd, self.survey_md)


def resolve_temperature_rows(rows: List[Dict[str, Any]],
                             converter: DepthConverter) -> List[TemperaturePoint]:
    """
    Fill in the missing depth of each temperature row.

    Each row carries 'md' or 'tvd' (raw strings accepted, ',' as decimal
    mark) plus 'temp'. An MD drives the TVD; a TVD alone drives the MD.
    """
    resolved = []
    for row in rows:
        md = _depth_value(row.get('md'))
        tvd = _depth_value(row.get('tvd'))
        temp = _depth_value(row.get('temp'))

        if md is not None:
            tvd = round(converter.get_tvd(md), 1)
        elif tvd is not None:
            md = round(converter.get_md(tvd), 1)

        resolved.append(TemperaturePoint(md=md, tvd=tvd, temp=temp))
    return resolved


def _depth_value(raw) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    return parse_number(str(raw).replace(',', '.', 1))
