from pathlib import Path

from planner.utilities.config import DATA_DIR as _CONFIG_DATA_DIR, STORE_FILE_NAME

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()
STORE_FILE = DATA_DIR / STORE_FILE_NAME

__all__ = ['DATA_DIR', 'STORE_FILE']
