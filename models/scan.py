from datetime import datetime
import pytz

class Scan:
    # Writes run on the caller's connection so a scan and its totals commit together

    @staticmethod
    def save(conn, user_id, station_id, transport_mode, co2_saved_g, points):
        """Insert a scan and return its id and timestamp."""
        timestamp = datetime.now(pytz.utc)
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO scans (user_id, station_id, transport_mode, co2_saved_g, points, timestamp)
            VALUES (%s, %s, %s, %s, %s, %s)
        """, (user_id, station_id, transport_mode, co2_saved_g, points, timestamp))
        scan_id = cursor.lastrowid
        cursor.close()
        return scan_id, timestamp

    @staticmethod
    def touch_last_scan(conn, user_id, station_id):
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO last_scans (user_id, station_id, last_scan)
            VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE last_scan = VALUES(last_scan)
        """, (user_id, station_id, datetime.now(pytz.utc)))
        cursor.close()
