# src/calculators/well_engine/simulation_parser.py
import logging
import re
from typing import List, Optional

from src.calculators.well_engine.models import SimulationSample
from src.calculators.well_engine.survey_parser import parse_number

logger = logging.getLogger(__name__)

_SPLIT = re.compile(r'[\t,;]+')
_STARTS_WITH_DIGIT = re.compile(r'^\d')
HEADER_SCAN_LINES = 10


def parse_simulation_csv(text: Optional[str]) -> List[SimulationSample]:
    """
    Parse a per-depth RIH/POOH force export.

    Columns are md, rih, pooh. The first line starting with a digit within
    the first ten lines is the first data row (one header line is assumed
    otherwise). Unreadable rih/pooh become None, rows without a readable md
    are dropped. Samples are returned sorted by md (stable).
    """
    if not text:
        return []

    lines = text.split('\n')

    start_idx = 1
    for i, line in enumerate(lines[:HEADER_SCAN_LINES]):
        if _STARTS_WITH_DIGIT.match(line.strip()):
            start_idx = i
            break

    samples = []
    for line in lines[start_idx:]:
        line = line.strip()
        if not line:
            continue
        parts = _SPLIT.split(line)
        md = parse_number(parts[0])
        if md is None:
            logger.debug(f"Simulation row dropped, unreadable md: {line!r}")
            continue
        rih = parse_number(parts[1]) if len(parts) > 1 else None
        pooh = parse_number(parts[2]) if len(parts) > 2 else None
        samples.append(SimulationSample(md=md, rih=rih, pooh=pooh))

    return sorted(samples, key=lambda s: s.md)
