# src/calculators/well_engine/run_stitcher.py
"""
RIH / tractor / POOH run stitching.

Merges up to three independently sampled force-vs-depth files into one
chart series:

    md <  force_depth                 -> rih_standard_1  (tractor off, file 1)
    force_depth <= md < stop_depth    -> rih_tractor     (tractor on,  file 2)
    md >= stop_depth                  -> rih_standard_2  (tractor off, file 1)

Samples are matched across files by proximity (|Δmd| < tolerance), not
by exact depth. Where file 1 ends before stop_depth (lock-up), the last
tractor-off value is carried flat through phase 3. Single connector
values are copied into the neighbouring phase so the plotted line does
not break at the transitions.
"""
import logging
import math
from typing import List, Optional, Sequence, Dict, Any

from src.calculators.well_engine.models import SimulationSample, StitchedPoint, PickupWeight

logger = logging.getLogger(__name__)

MATCH_TOLERANCE = 0.5     # depth units
PICKUP_TOLERANCE = 50.0   # depth units

DEFAULT_MD_MAX = 8000.0
DEFAULT_WEIGHT_MAX = 3000.0
WEIGHT_FLOOR = -200.0


def find_near(samples: Optional[Sequence[SimulationSample]], md: float,
              tolerance: float = MATCH_TOLERANCE) -> Optional[SimulationSample]:
    """First sample (in file order) within `tolerance` of md."""
    if not samples:
        return None
    for sample in samples:
        if abs(sample.md - md) < tolerance:
            return sample
    return None


def preview_run_data(rih: Sequence[SimulationSample],
                     pooh: Optional[Sequence[SimulationSample]] = None,
                     tolerance: float = MATCH_TOLERANCE) -> List[StitchedPoint]:
    """
    Un-stitched display of the tractor-off file.

    Every RIH sample maps to rih_standard_1. POOH comes from the override
    file when one is given (None without a match), else from the RIH file.
    """
    points = []
    for sample in rih or []:
        if pooh:
            match = find_near(pooh, sample.md, tolerance)
            pooh_value = match.pooh if match else None
        else:
            pooh_value = sample.pooh
        points.append(StitchedPoint(md=sample.md, rih_standard_1=sample.rih, pooh=pooh_value))
    return points


def stitch_run_data(rih: Sequence[SimulationSample],
                    tractor: Optional[Sequence[SimulationSample]] = None,
                    pooh: Optional[Sequence[SimulationSample]] = None,
                    force_depth: Optional[float] = 0.0,
                    stop_depth: Optional[float] = 0.0,
                    tolerance: float = MATCH_TOLERANCE) -> List[StitchedPoint]:
    """
    Stitch tractor-off, tractor-on and POOH files into one series.

    Args:
        rih: Tractor-off samples (file 1), required
        tractor: Tractor-on samples (file 2)
        pooh: POOH override samples (file 3)
        force_depth: Depth the tractor engages; unset or <= 0 means the
            deepest RIH sample
        stop_depth: Depth the tractor disengages; unset or <= force_depth
            means never
        tolerance: Proximity for matching samples across files

    Returns:
        StitchedPoint rows in ascending md order.
    """
    if not rih:
        return []
    if not tractor:
        return preview_run_data(rih, pooh, tolerance)

    if not force_depth or force_depth <= 0:
        force_depth = max(p.md for p in rih)
    if not stop_depth or stop_depth <= force_depth:
        stop_depth = math.inf

    # without a tractor file the preview above already took pooh from file 1
    pooh_source = 'override' if pooh else 'tractor'

    all_mds = sorted({p.md for p in rih} | {p.md for p in tractor} | {p.md for p in (pooh or [])})

    merged = []
    last_std1_value = None
    last_std1_index = -1
    last_tractor_value = None
    last_tractor_index = -1
    has_tractor_phase = False

    for index, md in enumerate(all_mds):
        off_point = find_near(rih, md, tolerance)
        on_point = find_near(tractor, md, tolerance)
        point = StitchedPoint(md=md)

        if md < force_depth:
            if off_point:
                point.rih_standard_1 = off_point.rih
                last_std1_value = off_point.rih
                last_std1_index = index
        elif md < stop_depth:
            has_tractor_phase = True
            if on_point:
                point.rih_tractor = on_point.rih
                last_tractor_value = on_point.rih
                last_tractor_index = index
        else:
            if off_point:
                point.rih_standard_2 = off_point.rih
            elif last_std1_value is not None:
                # tractor-off file ended early (lock-up): carry the last value
                point.rih_standard_2 = last_std1_value

        if pooh_source == 'override':
            match = find_near(pooh, md, tolerance)
            point.pooh = match.pooh if match else None
        elif on_point:
            point.pooh = on_point.pooh

        merged.append(point)

    # connector: standard 1 -> tractor
    if last_std1_index != -1 and has_tractor_phase:
        connector = merged[last_std1_index]
        if connector.md < stop_depth and connector.rih_tractor is None:
            connector.rih_tractor = last_std1_value

    # connector: tractor -> standard 2, only when a phase 3 segment follows
    if last_tractor_index != -1:
        connector = merged[last_tractor_index]
        next_point = merged[last_tractor_index + 1] if last_tractor_index + 1 < len(merged) else None
        if next_point and (next_point.rih_standard_2 is not None or connector.rih_standard_2 is not None):
            if connector.rih_standard_2 is None:
                connector.rih_standard_2 = last_tractor_value

    logger.debug(f"Stitched {len(merged)} points (force={force_depth}, stop={stop_depth}, pooh={pooh_source})")
    return merged


def generate_ticks(min_value: float, max_value: float, step: float) -> List[float]:
    """Axis ticks on multiples of `step` covering [min_value, max_value]."""
    if step <= 0:
        raise ValueError("Tick step must be positive")
    start = math.floor(min_value / step) * step
    end = math.ceil(max_value / step) * step
    count = int(round((end - start) / step))
    return [start + i * step for i in range(count + 1)]


def chart_domain(points: Sequence[StitchedPoint]) -> Dict[str, Any]:
    """Axis extents and ticks for a stitched series."""
    values = [v for p in points
              for v in (p.rih_standard_1, p.rih_standard_2, p.rih_tractor, p.pooh)
              if v is not None]

    md_max = max((p.md for p in points), default=DEFAULT_MD_MAX)
    weight_max = max(values) if values else DEFAULT_WEIGHT_MAX
    weight_min = max(min(values) if values else WEIGHT_FLOOR, WEIGHT_FLOOR)

    return {
        'md_max': md_max,
        'weight_min': weight_min,
        'weight_max': weight_max,
        'md_ticks': generate_ticks(0, md_max, 500),
        'weight_ticks': generate_ticks(weight_min, weight_max, 100)
    }


def pickup_deviations(pickups: Sequence[PickupWeight],
                      points: Sequence[StitchedPoint],
                      tolerance: float = PICKUP_TOLERANCE) -> List[Dict[str, Any]]:
    """
    Compare rig pickup weights with the simulated curve.

    The first chart point within `tolerance` of the pickup depth is used.
    RIH pickups read the first available RIH phase, POOH pickups the pooh
    column. Deviation is measured minus simulated, None without a match.
    """
    rows = []
    for pickup in pickups:
        match = next((p for p in points if abs(p.md - pickup.md) < tolerance), None)
        simulated = None
        if match is not None:
            if pickup.type == 'RIH':
                simulated = next((v for v in (match.rih_standard_1, match.rih_standard_2, match.rih_tractor)
                                  if v is not None), None)
            else:
                simulated = match.pooh

        rows.append({
            'md': pickup.md,
            'weight': pickup.weight,
            'type': pickup.type,
            'simulated': simulated,
            'deviation': pickup.weight - simulated if simulated is not None else None
        })
    return rows
