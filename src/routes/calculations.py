from flask import Blueprint, jsonify

calculations_bp = Blueprint('calculations', __name__)


@calculations_bp.route('/', methods=['GET'])
def get_supported_calculations():
    """Return information about available calculations"""
    calculations = [
        {
            'id': 'survey-parse',
            'name': 'Survey Parser',
            'description': 'Reads delimited survey text into MD/Inc/Azi stations',
            'endpoint': '/api/v1/survey/parse',
            'method': 'POST'
        },
        {
            'id': 'trajectory',
            'name': 'Minimum Curvature Trajectory',
            'description': 'TVD, north and east for each survey station',
            'endpoint': '/api/v1/survey/trajectory',
            'method': 'POST'
        },
        {
            'id': 'depth-convert',
            'name': 'MD/TVD Conversion',
            'description': 'Piecewise-linear MD to TVD and TVD to MD lookup',
            'endpoint': '/api/v1/survey/depth-convert',
            'method': 'POST'
        },
        {
            'id': 'casing-id',
            'name': 'Casing ID',
            'description': 'Inner diameter from OD and linear weight',
            'endpoint': '/api/v1/casing/calculate-id',
            'method': 'POST'
        },
        {
            'id': 'pressure-profile',
            'name': 'Hydrostatic Pressure Profile',
            'description': 'Pressure vs MD for a layered fluid column',
            'endpoint': '/api/v1/fluids/pressure-profile',
            'method': 'POST'
        },
        {
            'id': 'fluid-interface',
            'name': 'Fluid Interface',
            'description': 'Interface depth between two fluids from a downhole gauge',
            'endpoint': '/api/v1/fluids/interface',
            'method': 'POST'
        },
        {
            'id': 'simulation-parse',
            'name': 'Simulation Parser',
            'description': 'Reads md/RIH/POOH force exports',
            'endpoint': '/api/v1/simulations/parse',
            'method': 'POST'
        },
        {
            'id': 'stitch',
            'name': 'Run Stitcher',
            'description': 'Merges tractor-off, tractor-on and POOH files into one curve',
            'endpoint': '/api/v1/simulations/stitch',
            'method': 'POST'
        },
        {
            'id': 'pressure-adjustment',
            'name': 'WHP Adjustment',
            'description': 'Shifts hook loads for a changed wellhead pressure',
            'endpoint': '/api/v1/simulations/pressure-adjustment',
            'method': 'POST'
        },
        {
            'id': 'pickup-deviation',
            'name': 'Pickup Weight Deviation',
            'description': 'Rig pickup weights against the simulated curve',
            'endpoint': '/api/v1/simulations/pickup-deviation',
            'method': 'POST'
        }
    ]

    return jsonify({'calculations': calculations})
