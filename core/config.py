# core/config.py
# Values read from the environment (.env is loaded by the entry points).

import os

BASE_CURRENCY = "INR"

# Units of each currency per 1 INR. Used until (and unless) a live fetch succeeds.
FALLBACK_RATES: dict[str, float] = {
    "INR": 1.0,
    "USD": 0.012,
    "EUR": 0.011,
    "GBP": 0.0095,
    "JPY": 1.78,
    "AED": 0.044,
}
SUPPORTED_CURRENCIES = tuple(FALLBACK_RATES)

RATES_API_URL = os.getenv("RATES_API_URL", f"https://open.er-api.com/v6/latest/{BASE_CURRENCY}")
RATES_TIMEOUT = float(os.getenv("RATES_TIMEOUT", "10"))

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))

PLANNER_DATA_DIR = os.getenv(
    "PLANNER_DATA_DIR", os.path.join(os.path.expanduser("~"), ".itinerary_planner")
)
EXPORT_FILE_NAME = "itinerary.json"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
