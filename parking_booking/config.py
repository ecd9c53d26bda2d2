import os
from zoneinfo import ZoneInfo
from dotenv import load_dotenv

load_dotenv()


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./parking.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SECONDS_PER_HOUR = 3600
    TIMEZONE = os.getenv("PARKING_TIMEZONE", "UTC")

    # BOOKING WINDOW LIMITS (WHOLE HOURS)
    MIN_DURATION_HOURS = 1
    MAX_DURATION_HOURS = 8

    # LOT MAP WINDOW WHEN ONLY A DATE IS GIVEN
    DEFAULT_START_TIME = "09:00"
    DEFAULT_DURATION_HOURS = 1

    # EXTRA ATTEMPTS FOR READ QUERIES ONLY, WRITES ARE NEVER RETRIED
    READ_RETRIES = int(os.getenv("READ_RETRIES", "2"))

    DEMO_USER_EMAIL = os.getenv("DEMO_USER_EMAIL", "demo@example.com")
    DEMO_USER_NAME = os.getenv("DEMO_USER_NAME", "Demo User")
    PLACEHOLDER_PASSWORD_HASH = "hashed_password"

    @staticmethod
    def get_timezone():
        return ZoneInfo(Config.TIMEZONE)
