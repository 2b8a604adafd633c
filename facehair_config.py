from pathlib import Path
import os
from dotenv import load_dotenv

# Load .env (if present) so env-based configuration works in dev
load_dotenv()

# Remote share codes are fetched through this prefix (empty = direct GET)
FETCH_PROXY = os.getenv("FACEHAIR_FETCH_PROXY", "https://proxy.corsfix.com?")
FETCH_TIMEOUT = float(os.getenv("FACEHAIR_FETCH_TIMEOUT", "30"))

# Saved presets, one JSON file each
PRESETS_DIR = Path(os.getenv("FACEHAIR_PRESETS_DIR", "./presets"))

# QR image geometry
QR_BOX_SIZE = int(os.getenv("FACEHAIR_QR_BOX_SIZE", "4"))
QR_BORDER = int(os.getenv("FACEHAIR_QR_BORDER", "4"))

LOG_LEVEL = os.getenv("FACEHAIR_LOG_LEVEL", "INFO")
