import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrflow_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REGION_UTC_OFFSET_HOURS = 4
LATE_GRACE_MINUTES = 0

HOURS_DEDUCTION = {"enabled": False, "hours": 0, "minutes": 0}

OVERLAY_PRECEDENCE = "leave_wins"

AUTO_INIT_DB = False
