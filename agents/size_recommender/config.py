import os
import logging

from dotenv import load_dotenv

load_dotenv()

# --- SERVICE ---
SERVICE_NAME = os.getenv("SERVICE_NAME", "size-recommender")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- RECORDER ---
# log | json | sql
RECORDER_BACKEND = os.getenv("RECORDER_BACKEND", "log").strip().lower()
RECORDS_FILE = os.getenv("RECORDS_FILE", "/data/size_recommendations.json")
RECORDS_LIMIT = int(os.getenv("RECORDS_LIMIT", "1000"))
DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

# --- CORS ---
CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}

DEFAULT_MATCH_NAME = "Unnamed match"
DEFAULT_CLIENT_INFO = "Unknown client"


def setup_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
