# src/calculators/well_engine/survey_parser.py
"""
Survey table reader.

Turns pasted or uploaded survey text into ordered SurveyStation rows.
Malformed rows are skipped and bad numeric tokens read as 0; nothing here
raises on content.
"""
import logging
import math
import re
from typing import List, Optional, Dict, Any

from src.calculators.well_engine.models import SurveyStation, SurveyParserConfig

logger = logging.getLogger(__name__)

_AUTO_SPLIT = re.compile(r'[\t,; ]+')
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_DATA_LINE = re.compile(r'^\s*[\d.,]+\s')


def parse_number(token: Optional[str]) -> Optional[float]:
    """
    Read the leading number of a token ("12.5m" -> 12.5).

    Returns None when the token does not start with a number.
    """
    if token is None:
        return None
    match = _LEADING_NUMBER.match(token.strip())
    if not match:
        return None
    return float(match.group(0))


def clean_float(token: Optional[str], thousand_sep: str) -> float:
    """Normalise a survey cell to a float; anything unreadable is 0."""
    if not token:
        return 0.0

    s = str(token)
    if s.startswith('"'):
        s = s[1:]
    if s.endswith('"'):
        s = s[:-1]

    if thousand_sep == 'space':
        s = re.sub(r'\s', '', s)
    elif thousand_sep == '.':
        s = s.replace('.', '')
    elif thousand_sep == ',':
        s = s.replace(',', '')

    # a comma is only a decimal mark when it is not the thousands separator
    if thousand_sep != ',':
        s = s.replace(',', '.', 1)

    value = parse_number(s)
    return 0.0 if value is None else value


def split_line(line: str, delimiter: str) -> List[str]:
    if delimiter == 'auto':
        return _AUTO_SPLIT.split(line)
    if delimiter == 'tab':
        return line.split('\t')
    return line.split(delimiter)


def parse_survey_data(text: Optional[str], config: SurveyParserConfig) -> List[SurveyStation]:
    """
    Parse survey text into stations.

    Args:
        text: Raw text, one station per line
        config: Column/delimiter/unit options

    Returns:
        Stations in file order. Rows missing the MD or Inc column are
        skipped, a missing Azi reads as 0, rows with negative MD are dropped.
    """
    if not text:
        return []

    lines = text.split('\n')
    stations = []

    for line_no in range(config.start_line - 1, len(lines)):
        line = lines[line_no].strip()
        if not line:
            continue

        parts = split_line(line, config.delimiter)
        raw_md = _column(parts, config.col_md)
        raw_inc = _column(parts, config.col_inc)
        raw_azi = _column(parts, config.col_azi)

        if raw_md is None or raw_inc is None:
            logger.debug(f"Survey line {line_no + 1} skipped: missing MD/Inc column")
            continue

        md = clean_float(raw_md, config.thousand_sep) * config.unit_multiplier
        inc = clean_float(raw_inc, config.thousand_sep)
        azi = clean_float(raw_azi, config.thousand_sep)

        if math.isnan(md) or md < 0:
            logger.debug(f"Survey line {line_no + 1} skipped: invalid MD {md}")
            continue

        stations.append(SurveyStation(md=round(md, 2), inc=inc, azi=azi))

    return stations


def detect_survey_layout(text: Optional[str], max_lines: int = 20) -> Dict[str, Any]:
    """
    Guess where the data starts and whether the table is comma separated.

    The first line (of the first `max_lines`) that begins with a number
    followed by whitespace is taken as the first data row.
    """
    layout = {'start_line': 1, 'delimiter': 'auto'}
    if not text:
        return layout

    lines = text.split('\n')
    for i, line in enumerate(lines[:max_lines]):
        if _DATA_LINE.match(line):
            layout['start_line'] = i + 1
            if ',' in line and '\t' not in line:
                layout['delimiter'] = ','
            break

    return layout


def format_survey_text(stations: List[SurveyStation]) -> str:
    """Render stations as a tab separated table with a header row."""
    rows = [f"{_fmt(s.md)}\t{_fmt(s.inc)}\t{_fmt(s.azi)}" for s in stations]
    return "MD\tInc\tAzi\n" + "\n".join(rows)


def _column(parts: List[str], col: int) -> Optional[str]:
    index = col - 1
    if index < len(parts):
        return parts[index]
    return None


def _fmt(value: float) -> str:
    # integral floats print without the trailing ".0"
    return str(int(value)) if float(value).is_integer() else repr(float(value))
