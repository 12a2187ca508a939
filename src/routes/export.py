from flask import Blueprint, request, jsonify
from src.calculators.well_engine.models import (
    SurveyStation, CasingSection, TemperaturePoint, FluidLayer, RodProperties, ToolElement
)
from src.calculators.well_engine.export_values import export_values
from src.utils.serialization import to_native

export_bp = Blueprint('export', __name__)


@export_bp.route('/values', methods=['POST'])
def values():
    """
    Numeric values for the project-file exporter

    Expected input format:
    {
        "survey": [...],
        "architecture": [...],          # casing sections (ID in cm)
        "whp": float,                   # bar
        "temperatures": [{"md": float, "temp": float}, ...],  # deg C
        "target_depth": float,          # optional
        "fluids": [{"type", "sg", "percent"}, ...],           # optional
        "scenario": "Shut-in" | "Flow" | "Injection",         # optional
        "rod": {"diameter", "weight", "youngs", "fluidFric", "rihFric", "poohFric"},
        "pce": {"force": float, "friction": float},           # stuffing box
        "tools": [{"name", "length", "od", "weight", "isTractor", ...}, ...]
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get('survey'), list):
        return jsonify({'error': 'Survey data is required as a list'}), 400

    try:
        stations = [SurveyStation.from_dict(s) for s in data['survey']]
        sections = [CasingSection.from_dict(s) for s in data.get('architecture', [])]
        temps = [TemperaturePoint(md=_opt(t.get('md')), tvd=_opt(t.get('tvd')), temp=_opt(t.get('temp')))
                 for t in data.get('temperatures', [])]
        whp = float(data.get('whp') or 0.0)
        target = float(data['target_depth']) if data.get('target_depth') else None
        fluids = [FluidLayer.from_dict(f) for f in data.get('fluids', [])]
        rod = RodProperties.from_dict(data.get('rod'))
        tools = [ToolElement.from_dict(t) for t in data.get('tools', [])]
        pce = data.get('pce') or {}
        stuffing_box = {'force': _opt(pce.get('force')), 'friction': _opt(pce.get('friction'))}
    except (AttributeError, TypeError, ValueError) as e:
        return jsonify({'error': f'Validation error: {str(e)}'}), 422

    return jsonify(to_native(export_values(stations, sections, whp, temps, target,
                                           fluids=fluids,
                                           scenario=data.get('scenario'),
                                           rod=rod,
                                           tools=tools,
                                           stuffing_box=stuffing_box)))


def _opt(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
