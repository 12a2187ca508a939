from flask import Blueprint, request, jsonify, current_app
from src.calculators.well_engine.models import SurveyStation, FluidLayer
from src.calculators.well_engine.trajectory import DepthConverter
from src.calculators.well_engine.pressure_profile import (
    compute_pressure_profile, validate_fluid_percentages, calculate_fluid_interface, fluid_bands,
    percent_from_tvd
)
from src.utils.serialization import to_native

fluids_bp = Blueprint('fluids', __name__)


def _fluids(data):
    return [FluidLayer.from_dict(f) for f in data.get('fluids', [])]


@fluids_bp.route('/pressure-profile', methods=['POST'])
def pressure_profile():
    """
    Hydrostatic pressure vs MD

    Expected input format:
    {
        "survey": [{"md": float, "inc": float, "azi": float}, ...],
        "fluids": [
            {"type": "Gas" | "Oil" | "Water", "sg": float, "percent": float},
            ...   # top to bottom
        ],
        "whp": float   # bar
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('survey'), list):
        return jsonify({'error': 'Survey data is required as a list'}), 400
    if not isinstance(data.get('fluids'), list):
        return jsonify({'error': 'Fluids are required as a list'}), 400

    try:
        fluids = _fluids(data)
        whp = float(data.get('whp') or 0.0)
        converter = DepthConverter([SurveyStation.from_dict(s) for s in data['survey']])
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    steps = current_app.config.get('PRESSURE_PROFILE_STEPS', 50)
    profile = compute_pressure_profile(fluids, whp, converter.max_md, converter.max_tvd,
                                       converter.get_tvd, steps=steps)

    bands = [{'type': b['fluid'].type.value, 'start_tvd': b['start_tvd'], 'end_tvd': b['end_tvd'],
              'percent': percent_from_tvd(b['end_tvd'] - b['start_tvd'], converter.max_tvd)}
             for b in fluid_bands(fluids, converter.max_tvd)]

    return jsonify(to_native({
        'profile': profile,
        'bands': bands,
        'validation': validate_fluid_percentages(fluids)
    }))


@fluids_bp.route('/validate', methods=['POST'])
def validate():
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('fluids'), list):
        return jsonify({'error': 'Fluids are required as a list'}), 400
    try:
        fluids = _fluids(data)
    except ValueError as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422
    return jsonify(validate_fluid_percentages(fluids))


@fluids_bp.route('/interface', methods=['POST'])
def interface():
    """
    Fluid interface depth from a downhole gauge

    Expected input format:
    {
        "top_sg": float, "bottom_sg": float,
        "gauge_pressure": float,   # bar
        "gauge_depth": float,      # m TVD
        "whp": float,              # bar
        "max_tvd": float
    }
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON data in request'}), 400

    required_fields = ['top_sg', 'bottom_sg', 'gauge_pressure', 'gauge_depth', 'max_tvd']
    for field in required_fields:
        if field not in data:
            return jsonify({'error': f'Missing required field: {field}'}), 400

    try:
        result = calculate_fluid_interface(
            float(data['top_sg']),
            float(data['bottom_sg']),
            float(data['gauge_pressure']),
            float(data.get('whp') or 0.0),
            float(data['gauge_depth']),
            float(data['max_tvd'])
        )
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify(result)
