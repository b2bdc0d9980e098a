import logging
from pathlib import Path

# Snapshot location, relative to the working directory
DATA_FILE = Path("store_data.json")

# Seeded into every fresh store
DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASS = "password"

LOG_DIR = "logs"
LOG_FILE = "storekeeper.log"
LOG_LEVEL = logging.INFO
