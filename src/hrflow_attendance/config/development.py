import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrflow_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Gulf Standard Time, no daylight saving
REGION_UTC_OFFSET_HOURS = int(os.getenv("REGION_UTC_OFFSET_HOURS", "4"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))

# Subtracted from every worked day before weekly totals
HOURS_DEDUCTION = {
    "enabled": bool(int(os.getenv("HOURS_DEDUCTION_ENABLED", "0"))),
    "hours": int(os.getenv("HOURS_DEDUCTION_HOURS", "0")),
    "minutes": int(os.getenv("HOURS_DEDUCTION_MINUTES", "0")),
}

# "leave_wins" or "exception_wins"
OVERLAY_PRECEDENCE = os.getenv("OVERLAY_PRECEDENCE", "leave_wins")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
