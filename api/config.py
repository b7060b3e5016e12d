"""Application configuration and constants."""
import os
import sys
from pathlib import Path


def _resource_path(relative: str) -> Path:
    """Get path to resource, works for PyInstaller bundles."""
    if getattr(sys, "frozen", False):
        base_dir = Path(sys._MEIPASS)
    else:
        base_dir = Path(__file__).resolve().parent.parent
    return base_dir / relative


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float_env(name: str, default: float) -> float:
    """Parse float from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Content catalogs
STATIC_CATALOG_DIR = Path(
    os.environ.get("STATIC_CATALOG_DIR", _resource_path("data/catalog"))
)
STORAGE_BASE_URL = os.environ.get("STORAGE_BASE_URL", "")
APP_ID = os.environ.get("APP_ID", "default-app-id")

# Selection
DEFAULT_BATCH_SIZE = _parse_int_env("DEFAULT_BATCH_SIZE", 30)
MAX_BATCH_SIZE = _parse_int_env("MAX_BATCH_SIZE", 200)

# External store calls
STORE_TIMEOUT_SECONDS = _parse_float_env("STORE_TIMEOUT_SECONDS", 10.0)
STORE_MAX_WORKERS = _parse_int_env("STORE_MAX_WORKERS", 4)

# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'ssbprep.db'}"
)

# Authentication
SECRET_KEY = os.environ.get(
    "SECRET_KEY",
    "CHANGE_ME_IN_PRODUCTION_USE_openssl_rand_hex_32"
)
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _parse_int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
SESSION_EXTEND_MINUTES = _parse_int_env("SESSION_EXTEND_MINUTES", 60)
