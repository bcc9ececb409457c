from models.db import get_connection


class Station:
    @staticmethod
    def find_by_id(station_id):
        conn = get_connection()
        cursor = conn.cursor(dictionary=True)
        cursor.execute("""
            SELECT id, name, school_id, points_value, latitude, longitude,
                   require_location, location_radius_meters
            FROM stations WHERE id = %s
        """, (station_id,))
        row = cursor.fetchone()
        cursor.close()
        conn.close()
        return row

    @staticmethod
    def increment_totals(conn, station_id, co2_saved_g, scans=1):
        cursor = conn.cursor()
        cursor.execute("""
            UPDATE stations
            SET total_scans = total_scans + %s,
                total_co2_saved_g = total_co2_saved_g + %s
            WHERE id = %s
        """, (scans, co2_saved_g, station_id))
        cursor.close()
