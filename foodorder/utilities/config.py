"""Configuration management for the Food Order Planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'

# Storage Settings
DB_PATH: Final[str] = os.getenv('FOOD_ORDER_DB_PATH', str(DATA_DIR / 'food_ordering.db'))
SEED_ON_CREATE: Final[bool] = os.getenv('FOOD_ORDER_SEED', 'true').lower() == 'true'

# Application Settings
LOG_LEVEL: Final[str] = os.getenv('FOOD_ORDER_LOG_LEVEL', 'WARNING').upper()
