import io
import logging

import pandas as pd
from flask import Blueprint, request, jsonify, current_app

from src.calculators.well_engine.models import (
    SimulationSample, StitchedPoint, PressureAdjustmentState, PickupWeight
)
from src.calculators.well_engine.simulation_parser import parse_simulation_csv
from src.calculators.well_engine.run_stitcher import (
    stitch_run_data, preview_run_data, chart_domain, pickup_deviations
)
from src.calculators.well_engine.pressure_adjustment import compute_weight_offset, adjusted_chart_data
from src.utils.serialization import to_native

logger = logging.getLogger(__name__)

simulations_bp = Blueprint('simulations', __name__)

STITCHED_COLUMNS = ['md', 'rih_standard_1', 'rih_tractor', 'rih_standard_2', 'pooh']


def _samples(data, key):
    """Samples for one file slot: raw CSV text or a list of {md, rih, pooh}."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return parse_simulation_csv(value)
    return [SimulationSample.from_dict(s) for s in value]


def _points(data):
    return [StitchedPoint.from_dict(p) for p in data.get('points', [])]


@simulations_bp.route('/parse', methods=['POST'])
def parse():
    """
    Parse a simulation export

    Expected input format:
    {
        "text": string   # md, rih, pooh per line
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('text'), str):
        return jsonify({'error': 'Simulation text is required as a string'}), 400

    samples = parse_simulation_csv(data['text'])
    return jsonify(to_native({'samples': samples, 'count': len(samples)}))


@simulations_bp.route('/stitch', methods=['POST'])
def stitch():
    """
    Stitch tractor-off, tractor-on and POOH files

    Expected input format:
    {
        "rih": string | [{"md", "rih", "pooh"}],      # tractor off, required
        "tractor": string | [...],                    # tractor on, optional
        "pooh": string | [...],                       # POOH override, optional
        "force_depth": float,                         # optional
        "stop_depth": float                           # optional
    }
    """
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'error': 'Invalid JSON data in request'}), 400
        if 'rih' not in data:
            return jsonify({'error': 'RIH (tractor off) file is required'}), 400

        try:
            rih = _samples(data, 'rih')
            tractor = _samples(data, 'tractor')
            pooh = _samples(data, 'pooh')
            force_depth = float(data.get('force_depth') or 0.0)
            stop_depth = float(data.get('stop_depth') or 0.0)
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({'error': f'Validation error: {str(e)}'}), 422

        tolerance = current_app.config.get('STITCH_TOLERANCE', 0.5)
        points = stitch_run_data(rih, tractor, pooh, force_depth, stop_depth, tolerance=tolerance)

        return jsonify(to_native({
            'points': points,
            'stitched': bool(tractor),
            'domain': chart_domain(points)
        }))
    except Exception as e:
        logger.error(f"Stitching failed: {e}")
        return jsonify({'error': f'Unexpected error: {str(e)}'}), 500


@simulations_bp.route('/preview', methods=['POST'])
def preview():
    """Display the tractor-off file without stitching"""
    data = request.get_json(silent=True)
    if not data or 'rih' not in data:
        return jsonify({'error': 'RIH (tractor off) file is required'}), 400

    try:
        points = preview_run_data(_samples(data, 'rih'), _samples(data, 'pooh'),
                                  tolerance=current_app.config.get('STITCH_TOLERANCE', 0.5))
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify(to_native({'points': points, 'domain': chart_domain(points)}))


@simulations_bp.route('/pressure-adjustment', methods=['POST'])
def pressure_adjustment():
    """
    Shift a stitched series for a hypothetical WHP

    Expected input format:
    {
        "points": [...],                 # stitched points
        "rod_diameter": float,           # cm
        "whp": float,                    # bar, as simulated
        "pressure_adjustment": {"enabled": bool, "adjustedWHP": float}
    }
    """
    data = request.get_json(silent=True)
    if not data or 'points' not in data:
        return jsonify({'error': 'Stitched points are required'}), 400

    try:
        points = _points(data)
        rod_diameter = float(data.get('rod_diameter') or 0.0)
        original_whp = float(data.get('whp') or 0.0)
        state = PressureAdjustmentState.from_dict(data.get('pressure_adjustment'), default_whp=original_whp)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    offset = compute_weight_offset(rod_diameter, original_whp, state.adjusted_whp) if state.enabled else 0.0
    adjusted = adjusted_chart_data(points, state, original_whp, rod_diameter)

    return jsonify(to_native({'weight_offset_kg': offset, 'points': adjusted}))


@simulations_bp.route('/pickup-deviation', methods=['POST'])
def pickup_deviation():
    """
    Compare rig pickup weights with the simulated curve

    Expected input format:
    {
        "points": [...],
        "pickup_weights": [{"md": float, "weight": float, "type": "RIH" | "POOH"}, ...]
    }
    """
    data = request.get_json(silent=True)
    if not data or 'points' not in data:
        return jsonify({'error': 'Stitched points are required'}), 400

    try:
        points = _points(data)
        pickups = [PickupWeight.from_dict(pw) for pw in data.get('pickup_weights', [])]
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    tolerance = current_app.config.get('PICKUP_TOLERANCE', 50.0)
    return jsonify(to_native({'pickup_weights': pickup_deviations(pickups, points, tolerance)}))


@simulations_bp.route('/export', methods=['POST'])
def export():
    data = request.get_json(silent=True)
    if not data or 'points' not in data:
        return jsonify({'error': 'Stitched points are required'}), 400

    format_type = request.args.get('format', 'json')
    try:
        points = _points(data)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    if format_type == 'json':
        return jsonify(to_native({'points': points}))
    elif format_type == 'csv':
        frame = pd.DataFrame([p.to_dict() for p in points], columns=STITCHED_COLUMNS)
        buffer = io.StringIO()
        frame.to_csv(buffer, index=False)
        return buffer.getvalue(), 200, {'Content-Type': 'text/csv'}
    else:
        return jsonify({"error": "Unsupported export format"}), 400
