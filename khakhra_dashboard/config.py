"""
config.py — Runtime settings, read from the environment (and .env if present).
"""

import os

from dotenv import load_dotenv

# BASE_DIR points to the project root (parent of khakhra_dashboard/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(BASE_DIR, ".env"))

STORAGE_KEY = "khakhra-business-state-v1"


def _env_flag(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


DATA_FILE = os.environ.get(
    "KHAKHRA_DATA_FILE",
    os.path.join(BASE_DIR, "data", f"{STORAGE_KEY}.json"),
)
SEED_SAMPLE_DATA = _env_flag("KHAKHRA_SEED_SAMPLE", True)

PORT = int(os.environ.get("PORT", 8070))
DEBUG = _env_flag("KHAKHRA_DEBUG", False)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

BUSINESS_NAME = os.environ.get("BUSINESS_NAME", "Khakhra Command Center")
BUSINESS_GSTIN = os.environ.get("BUSINESS_GSTIN", "24ABCDE1234F1Z5")
