import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent  # .../devbytes

PLAYLIST_URL = os.getenv("PLAYLIST_URL", "https://devbytes.udacity.com/devbytes.json")
PLAYLIST_FETCH_TIMEOUT_SEC = float(os.getenv("PLAYLIST_FETCH_TIMEOUT_SEC", "10"))
PLAYLIST_CACHE_KEY = os.getenv("PLAYLIST_CACHE_KEY", "videos:devbytes:all")
PLAYLIST_STORE_BACKEND = os.getenv("PLAYLIST_STORE_BACKEND", "redis").lower()
PLAYLIST_REFRESH_INTERVAL_SEC = int(os.getenv("PLAYLIST_REFRESH_INTERVAL_SEC", "0"))
PLAYLIST_SINGLE_FLIGHT = os.getenv("PLAYLIST_SINGLE_FLIGHT", "false").lower() == "true"

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
