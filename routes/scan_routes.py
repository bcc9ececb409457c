import logging

import mysql.connector
from flask import Blueprint, request, jsonify

import config
from models.db import get_connection
from models.scan import Scan
from models.station import Station
from models.user import User
from utils.co2_calculator import calculate_co2_saved_per_trip, validate_transport_mode
from utils.geolocation import Coordinates, verify_location

logger = logging.getLogger(__name__)

scan_bp = Blueprint('scan', __name__)


def _user_coordinates(data):
    """Coordinates from the request body, None when not sent. Raises ValueError if malformed."""
    latitude = data.get('latitude')
    longitude = data.get('longitude')
    if latitude is None or longitude is None:
        return None
    try:
        return Coordinates(float(latitude), float(longitude))
    except (TypeError, ValueError):
        raise ValueError("latitude and longitude must be numbers")


def _save_scan(user_id, station_id, transport_mode, co2_saved_g, points):
    conn = get_connection()
    try:
        scan_id, timestamp = Scan.save(conn, user_id, station_id, transport_mode, co2_saved_g, points)
        Scan.touch_last_scan(conn, user_id, station_id)
        Station.increment_totals(conn, station_id, co2_saved_g)
        User.increment_totals(conn, user_id, points, co2_saved_g)
        conn.commit()
    except mysql.connector.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
    return scan_id, timestamp


# POST /scans  - record a station scan and credit the CO2 saved on the trip
@scan_bp.route('/scans', methods=['POST'])
def record_scan():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be JSON"}), 400

    user_id = data.get('user_id')
    station_id = data.get('station_id')
    transport_mode = data.get('transport_mode')

    if user_id is None or station_id is None:
        return jsonify({"error": "user_id and station_id are required"}), 400

    error = validate_transport_mode(transport_mode)
    if error:
        return jsonify(error.to_dict()), 400

    try:
        user_coords = _user_coordinates(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        station = Station.find_by_id(station_id)
        if not station:
            return jsonify({"error": "Station not found"}), 404

        # Points are set per station, never by the client
        points = station.get('points_value')
        if points is None:
            points = config.DEFAULT_SCAN_POINTS

        distance_to_station = None
        if station.get('require_location') and station.get('latitude') is not None and station.get('longitude') is not None:
            check = verify_location(
                user_coords,
                Coordinates(float(station['latitude']), float(station['longitude'])),
                station.get('location_radius_meters') or config.DEFAULT_LOCATION_RADIUS_M,
            )
            if not check.verified:
                return jsonify({"error": check.error, "distance": check.distance}), 403
            distance_to_station = check.distance

        profile = User.get_commute_profile(user_id)
        if not profile:
            return jsonify({"error": "User not found"}), 404

        distance_km = profile.get('distance_to_school_km') or config.DEFAULT_DISTANCE_TO_SCHOOL_KM
        passengers = profile.get('carpool_passengers') or 1
        co2_saved_g = calculate_co2_saved_per_trip(float(distance_km), transport_mode, passengers)

        scan_id, timestamp = _save_scan(user_id, station_id, transport_mode, co2_saved_g, points)

    except mysql.connector.Error as e:
        logger.exception(f"Failed to record scan for user {user_id} at station {station_id}")
        return jsonify({"error": "Failed to record scan", "details": str(e)}), 500

    logger.info(f"Scan {scan_id} recorded: user={user_id}, station={station_id}, co2_saved_g={co2_saved_g}")
    return jsonify({
        "id": scan_id,
        "user_id": user_id,
        "station_id": station_id,
        "transport_mode": transport_mode,
        "co2_saved_g": co2_saved_g,
        "points": points,
        "timestamp": timestamp.isoformat(),
        "distance_to_station_m": distance_to_station,
    }), 201
