# config.py
import sys
from pathlib import Path


class Config:
    APP_TITLE = "Petshop App"
    WINDOW_GEOMETRY = "1100x720"
    DB_FILENAME = "petshop.db"
    THEME = "clam"                # ttk theme name, ignored when unavailable
    CURRENCY = "$"
    LOG_LEVEL = "INFO"
    LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_data_file_path(filename: str = Config.DB_FILENAME) -> str:
    """
    Decide where the database file lives.
    - frozen build (PyInstaller): next to the executable
    - normal run: next to this file
    """
    if getattr(sys, "frozen", False):
        base_dir = Path(sys.executable).resolve().parent
    else:
        base_dir = Path(__file__).resolve().parent
    return str(base_dir / filename)
