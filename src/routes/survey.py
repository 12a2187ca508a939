from flask import Blueprint, request, jsonify
from src.calculators.well_engine.models import SurveyStation, SurveyParserConfig
from src.calculators.well_engine.survey_parser import parse_survey_data, detect_survey_layout, format_survey_text
from src.calculators.well_engine.trajectory import (
    calculate_trajectory, interpolate, DepthConverter, resolve_temperature_rows
)
from src.utils.serialization import to_native

survey_bp = Blueprint('survey', __name__)


def _stations(data):
    return [SurveyStation.from_dict(s) for s in data['survey']]


@survey_bp.route('/parse', methods=['POST'])
def parse():
    """
    Parse survey text into stations

    Expected input format:
    {
        "text": string,
        "config": {
            "startLine": int,         # 1-based (default: 1)
            "delimiter": string,      # "auto", "tab", ",", ";" or custom
            "colMD": int, "colInc": int, "colAzi": int,  # 1-based
            "unitMultiplier": float,  # 0.3048 for feet
            "thousandSep": string     # "none", "space", ".", ","
        },
        "include_trajectory": bool    # optional
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('text'), str):
        return jsonify({'error': 'Survey text is required as a string'}), 400

    try:
        config = SurveyParserConfig.from_dict(data.get('config'))
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid parser config: {str(e)}'}), 400

    stations = parse_survey_data(data['text'], config)
    result = {'survey': stations, 'count': len(stations)}
    if data.get('include_trajectory', False):
        result['trajectory'] = calculate_trajectory(stations)

    return jsonify(to_native(result))


@survey_bp.route('/detect-layout', methods=['POST'])
def detect_layout():
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('text'), str):
        return jsonify({'error': 'Survey text is required as a string'}), 400
    return jsonify(detect_survey_layout(data['text']))


@survey_bp.route('/trajectory', methods=['POST'])
def trajectory():
    """
    Minimum curvature trajectory

    Expected input format:
    {
        "survey": [{"md": float, "inc": float, "azi": float}, ...]
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('survey'), list):
        return jsonify({'error': 'Survey data is required as a list'}), 400

    try:
        stations = _stations(data)
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    points = calculate_trajectory(stations)
    converter = DepthConverter(stations, points)
    return jsonify(to_native({
        'trajectory': points,
        'max_md': converter.max_md,
        'max_tvd': converter.max_tvd
    }))


@survey_bp.route('/depth-convert', methods=['POST'])
def depth_convert():
    """
    Convert depths between MD and TVD

    Expected input format:
    {
        "survey": [...],              # stations
        "md": [float] | "tvd": [float]
    }
    or, for a plain lookup table:
    {
        "xs": [float], "ys": [float], "x": [float]
    }
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON data in request'}), 400

    try:
        if 'xs' in data and 'ys' in data:
            xs, ys = data['xs'], data['ys']
            if len(xs) != len(ys):
                return jsonify({'error': 'xs and ys must have the same length'}), 400
            values = [interpolate(float(x), xs, ys) for x in data.get('x', [])]
            return jsonify(to_native({'y': values}))

        if not isinstance(data.get('survey'), list):
            return jsonify({'error': 'Survey data is required as a list'}), 400

        converter = DepthConverter(_stations(data))
        result = {}
        if 'md' in data:
            result['tvd'] = [converter.get_tvd(float(md)) for md in data['md']]
        if 'tvd' in data:
            result['md'] = [converter.get_md(float(tvd)) for tvd in data['tvd']]
        return jsonify(to_native(result))
    except (TypeError, ValueError, KeyError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422


@survey_bp.route('/temperatures', methods=['POST'])
def temperatures():
    """Fill in MD/TVD of temperature rows from the survey"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('survey'), list):
        return jsonify({'error': 'Survey data is required as a list'}), 400
    if not isinstance(data.get('temperatures'), list):
        return jsonify({'error': 'Temperature rows are required as a list'}), 400

    try:
        converter = DepthConverter(_stations(data))
        rows = resolve_temperature_rows(data['temperatures'], converter)
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    out_of_range = [r.md for r in rows if r.md is not None and r.md > converter.max_md]
    return jsonify(to_native({'temperatures': rows, 'exceeds_max_depth': bool(out_of_range)}))


@survey_bp.route('/format', methods=['POST'])
def format_text():
    """Render stations back to tab separated text"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('survey'), list):
        return jsonify({'error': 'Survey data is required as a list'}), 400

    try:
        stations = _stations(data)
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify({'text': format_survey_text(stations)})
