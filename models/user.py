from models.db import get_connection


class User:
    @staticmethod
    def get_commute_profile(user_id):
        """Distance to school and carpool size, or None if the user does not exist."""
        conn = get_connection()
        cursor = conn.cursor(dictionary=True)
        cursor.execute("""
            SELECT id, distance_to_school_km, carpool_passengers
            FROM users WHERE id = %s
        """, (user_id,))
        row = cursor.fetchone()
        cursor.close()
        conn.close()
        return row

    @staticmethod
    def increment_totals(conn, user_id, points, co2_saved_g):
        cursor = conn.cursor()
        cursor.execute("""
            UPDATE users
            SET total_points = total_points + %s,
                total_co2_saved_g = total_co2_saved_g + %s
            WHERE id = %s
        """, (points, co2_saved_g, user_id))
        cursor.close()
