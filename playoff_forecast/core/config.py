"""
Runtime configuration read from environment variables.
"""

import os


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


# Monte Carlo trial bounds (trial count is a latency/accuracy knob)
FORECAST_DEFAULT_TRIALS = _int_env("FORECAST_DEFAULT_TRIALS", 5000)
FORECAST_MIN_TRIALS = _int_env("FORECAST_MIN_TRIALS", 80)
FORECAST_MAX_TRIALS = _int_env("FORECAST_MAX_TRIALS", 5000)

# Forecast cache
FORECAST_CACHE_TTL_MINUTES = _int_env("FORECAST_CACHE_TTL_MINUTES", 15)

# League data providers
SLEEPER_TIMEOUT_SECONDS = float(os.getenv("SLEEPER_TIMEOUT_SECONDS", "30"))

# Forecast cache database; SQLite file by default, Postgres URLs accepted
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./playoff_forecast.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Comma-separated list of browser origins allowed to call the API
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
