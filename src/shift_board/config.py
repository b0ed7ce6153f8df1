"""
Configuration for Shift Board

Filesystem locations, logging and export defaults. Export directory and
log level can be overridden through environment variables.
"""

import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# === Common directories ===
LOG_DIR = PROJECT_ROOT / "logs"
EXPORT_DIR = Path(os.getenv("SHIFT_BOARD_EXPORT_DIR", str(PROJECT_ROOT / "exports")))

# === Logging ===
LOG_LEVEL = os.getenv("SHIFT_BOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_PREFIX = "shift_board"

# === Reports ===
DEFAULT_EXPORT_FORMATS = ["pdf", "excel", "csv"]
EXPORT_EXTENSIONS = {"pdf": "pdf", "excel": "xlsx", "csv": "csv"}
