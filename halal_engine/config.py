"""
Rule store selection, cache TTL, paths and Supabase credentials.
All resolution relative to the repository root.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Repo root: halal_engine/config.py -> parent=halal_engine, parent.parent=repo
_PACKAGE_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _PACKAGE_DIR.parent

# --- Rule store ---
RULINGS_STORE = os.environ.get("RULINGS_STORE", "json").strip().lower()

# Seconds an in-memory copy of the active rule set stays fresh
RULINGS_CACHE_TTL = int(os.environ.get("RULINGS_CACHE_TTL", "3600"))

# --- Data paths ---
def get_rulings_path() -> Path:
    override = os.environ.get("RULINGS_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "ingredient_rulings.json"

# --- Supabase (lazy read from env) ---
def get_rulings_table() -> str:
    return os.environ.get("RULINGS_TABLE", "ingredient_rulings").strip() or "ingredient_rulings"

def get_supabase_url() -> str:
    return os.environ.get("SUPABASE_URL", "").strip()

def get_supabase_key() -> str:
    return (
        os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        or os.environ.get("SUPABASE_ANON_KEY")
        or ""
    ).strip()

# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: rulings_store=%s rulings_path=%s exists=%s table=%s cache_ttl=%ds supabase_url=%s supabase_key=%s",
        RULINGS_STORE,
        get_rulings_path(), get_rulings_path().exists(),
        get_rulings_table(),
        RULINGS_CACHE_TTL,
        bool(get_supabase_url()), bool(get_supabase_key()),
    )
