import os

DB_CONFIG = {
    'host': os.environ.get('DB_HOST'),
    'port': int(os.environ.get('DB_PORT', 3306)),
    'user': os.environ.get('DB_USER'),
    'password': os.environ.get('DB_PASS'),
    'database': os.environ.get('DB_NAME')
}


LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Locale of transport mode labels returned to clients ('sk' or 'en')
MODE_LABEL_LOCALE = os.environ.get('MODE_LABEL_LOCALE', 'sk')


DEFAULT_SCAN_POINTS = int(os.environ.get('SCAN_POINTS', 10))

# Used when a student has not filled in their distance to school
DEFAULT_DISTANCE_TO_SCHOOL_KM = 2.0

DEFAULT_LOCATION_RADIUS_M = 50
