from pathlib import Path

from foodorder.utilities.config import DATA_DIR, DB_PATH

# Centralized paths for data files (single source of truth)
DB_FILE = Path(DB_PATH)

__all__ = ['DATA_DIR', 'DB_FILE']
