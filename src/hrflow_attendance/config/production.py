import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrflow_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REGION_UTC_OFFSET_HOURS = int(os.getenv("REGION_UTC_OFFSET_HOURS", "4"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))

HOURS_DEDUCTION = {
    "enabled": bool(int(os.getenv("HOURS_DEDUCTION_ENABLED", "0"))),
    "hours": int(os.getenv("HOURS_DEDUCTION_HOURS", "0")),
    "minutes": int(os.getenv("HOURS_DEDUCTION_MINUTES", "0")),
}

OVERLAY_PRECEDENCE = os.getenv("OVERLAY_PRECEDENCE", "leave_wins")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
