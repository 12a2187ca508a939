from flask import Blueprint, request, jsonify
from src.calculators.well_engine.models import CasingSection, CasingUnits
from src.calculators.well_engine.casing import (
    calculate_id_from_od_weight, update_casing_section, new_casing_section, sections_exceed_depth
)
from src.calculators.well_engine.units import toggle_casing_units
from src.utils.serialization import to_native

casing_bp = Blueprint('casing', __name__)


@casing_bp.route('/calculate-id', methods=['POST'])
def calculate_id():
    """
    Casing ID from OD and linear weight

    Expected input format:
    {
        "od": float,
        "weight": float,
        "unit_od": "cm" | "in",        # default: cm
        "unit_weight": "kg/m" | "lb/ft", # default: kg/m
        "unit_id": "cm" | "in"         # default: cm
    }

    Returns {"id": float | null}; null means keep the previous value.
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON data in request'}), 400

    for field in ('od', 'weight'):
        if field not in data:
            return jsonify({'error': f'Missing required field: {field}'}), 400

    try:
        od = float(data['od'])
        weight = float(data['weight'])
    except (TypeError, ValueError):
        return jsonify({'error': 'OD and weight must be valid numbers'}), 400

    inner = calculate_id_from_od_weight(
        od, weight,
        data.get('unit_od', 'cm'),
        data.get('unit_weight', 'kg/m'),
        data.get('unit_id', 'cm')
    )
    return jsonify({'id': inner})


@casing_bp.route('/update-section', methods=['POST'])
def update_section():
    """
    Edit one field of a casing section

    Expected input format:
    {
        "section": {...},   # CasingSection fields
        "field": string,    # start, end, od, weight, id, fric_rod_rih, ...
        "value": any
    }
    """
    data = request.get_json(silent=True)
    if not data or 'section' not in data or 'field' not in data:
        return jsonify({'error': 'Section and field are required'}), 400

    try:
        section = CasingSection.from_dict(data['section'])
        updated = update_casing_section(section, data['field'], data.get('value'))
    except ValueError as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify(to_native({'section': updated}))


@casing_bp.route('/new-section', methods=['POST'])
def add_section():
    data = request.get_json(silent=True) or {}
    sections = [CasingSection.from_dict(s) for s in data.get('sections', [])]
    units = CasingUnits.from_dict(data.get('units'))
    return jsonify(to_native({'section': new_casing_section(sections, units)}))


@casing_bp.route('/toggle-units', methods=['POST'])
def toggle_units():
    """
    Switch one unit family of the architecture table

    Expected input format:
    {
        "sections": [...],
        "units": {"depth": "m", "od": "cm", "id": "cm", "weight": "kg/m"},
        "key": "depth" | "od" | "id" | "weight"
    }
    """
    data = request.get_json(silent=True)
    if not data or 'key' not in data:
        return jsonify({'error': 'Unit key is required'}), 400

    try:
        sections = [CasingSection.from_dict(s) for s in data.get('sections', [])]
        units = CasingUnits.from_dict(data.get('units'))
        new_units, converted = toggle_casing_units(sections, units, data['key'])
    except ValueError as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify(to_native({'units': new_units, 'sections': converted}))


@casing_bp.route('/validate', methods=['POST'])
def validate():
    """Check section consistency and that no section is deeper than the well"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('sections'), list):
        return jsonify({'error': 'Sections are required as a list'}), 400

    try:
        sections = [CasingSection.from_dict(s) for s in data['sections']]
        max_depth = float(data['max_depth']) if 'max_depth' in data else None
    except (AttributeError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    errors = [{'index': i, 'error': msg}
              for i, msg in enumerate(s.validate() for s in sections) if msg]

    result = {'is_valid': not errors, 'errors': errors}
    if max_depth is not None:
        exceeds = sections_exceed_depth(sections, max_depth)
        result['exceeds_max_depth'] = exceeds
        result['is_valid'] = result['is_valid'] and not exceeds

    return jsonify(result)
