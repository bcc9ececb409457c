from flask import Blueprint, request, jsonify
from utils.co2_calculator import (
    CalculationError,
    CalculationRequest,
    EMISSION_FACTORS,
    calculate_co2,
    calculate_co2_saved_per_trip,
    format_co2,
    get_transport_mode_icon,
    get_transport_mode_name,
    validate_transport_mode,
)

co2_bp = Blueprint('co2', __name__)


@co2_bp.route('/co2/calculate', methods=['POST'])
def calculate():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be JSON"}), 400

    result = calculate_co2(CalculationRequest.from_dict(data))
    if isinstance(result, CalculationError):
        return jsonify(result.to_dict()), 400

    mode = result.assumptions.mode
    response = result.to_dict()
    response["formatted"] = {
        "per_trip": format_co2(result.per_trip_g),
        "per_day": format_co2(result.per_day_g),
        "monthly": format_co2(result.monthly_g),
        "mode_label": get_transport_mode_name(mode),
        "mode_icon": get_transport_mode_icon(mode),
    }
    return jsonify(response), 200


@co2_bp.route('/co2/factors', methods=['GET'])
def list_factors():
    factors = [
        {
            "mode": mode.value,
            "emission_factor": factor,
            "label": get_transport_mode_name(mode),
            "icon": get_transport_mode_icon(mode),
        }
        for mode, factor in EMISSION_FACTORS.items()
    ]
    return jsonify(factors)


@co2_bp.route('/co2/saved_per_trip', methods=['GET'])
def saved_per_trip():
    mode = request.args.get('mode')
    error = validate_transport_mode(mode)
    if error:
        return jsonify(error.to_dict()), 400

    distance_km = request.args.get('distance_km', type=float)
    if distance_km is None:
        return jsonify(CalculationError("Distance must be a number", field="distance_km").to_dict()), 400

    passengers = request.args.get('passengers', default=1, type=int)
    co2_saved_g = calculate_co2_saved_per_trip(distance_km, mode, passengers)
    return jsonify({
        "mode": mode,
        "distance_km": distance_km,
        "passengers": passengers,
        "co2_saved_g": co2_saved_g,
        "formatted": format_co2(co2_saved_g),
    })
