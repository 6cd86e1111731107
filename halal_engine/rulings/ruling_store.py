"""
Rule store adapters. The engine only reads; rows are decoded into RulingRule.
JSON file (data/ingredient_rulings.json) by default, Supabase table in production.
"""
from pathlib import Path
from typing import Any, Iterable, List, Optional
import json
import logging

from .ruling_schema import RulingRule
from halal_engine import config

logger = logging.getLogger(__name__)


class RulingStoreError(RuntimeError):
    """Rule store unreachable or unreadable."""


class RulingStore:
    """Any persistent source able to list ruling rows, filterable to active-only."""

    name = "base"

    def list_rules(self, active_only: bool = True) -> List[RulingRule]:
        raise NotImplementedError


def _filter_active(rules: Iterable[RulingRule], active_only: bool) -> List[RulingRule]:
    if not active_only:
        return list(rules)
    return [r for r in rules if r.is_active]


class InMemoryRulingStore(RulingStore):
    name = "memory"

    def __init__(self, rules: Optional[Iterable[RulingRule]] = None):
        self._rules: List[RulingRule] = list(rules or [])

    def list_rules(self, active_only: bool = True) -> List[RulingRule]:
        return _filter_active(self._rules, active_only)


class JsonRulingStore(RulingStore):
    """Reads {"rulings_version": ..., "rulings": [...]} from disk on every call."""

    name = "json"

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else config.get_rulings_path()
        self._version: str = "0"

    @property
    def path(self) -> Path:
        return self._path

    def get_version(self) -> str:
        return self._version

    def list_rules(self, active_only: bool = True) -> List[RulingRule]:
        if not self._path.exists():
            raise RulingStoreError(f"Rulings file not found at {self._path}")
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RulingStoreError(f"Rulings file unreadable at {self._path}: {e}") from e
        self._version = str(data.get("rulings_version", "0"))
        rules = [RulingRule.from_dict(item) for item in data.get("rulings", [])]
        logger.info("Loaded %d rulings (version %s) from %s", len(rules), self._version, self._path)
        return _filter_active(rules, active_only)


class SupabaseRulingStore(RulingStore):
    """
    Reads the ingredient_rulings table through supabase-py.
    Client is created lazily from SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY unless injected.
    """

    name = "supabase"

    def __init__(self, client: Any = None, table: Optional[str] = None):
        self._client = client
        self._table = table or config.get_rulings_table()

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        url, key = config.get_supabase_url(), config.get_supabase_key()
        if not url or not key:
            raise RulingStoreError("Supabase not configured (set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY)")
        from supabase import create_client
        self._client = create_client(url, key)
        return self._client

    def list_rules(self, active_only: bool = True) -> List[RulingRule]:
        client = self._get_client()
        try:
            query = client.table(self._table).select("*")
            if active_only:
                query = query.eq("is_active", True)
            response = query.execute()
        except Exception as e:
            raise RulingStoreError(f"Supabase read from {self._table} failed: {e}") from e
        rows = response.data or []
        rules = [RulingRule.from_dict(row) for row in rows]
        logger.info("Loaded %d rulings from supabase table=%s", len(rules), self._table)
        return _filter_active(rules, active_only)


def get_default_store() -> RulingStore:
    """Adapter selected by RULINGS_STORE (json | supabase)."""
    if config.RULINGS_STORE == "supabase":
        return SupabaseRulingStore()
    if config.RULINGS_STORE != "json":
        logger.warning("Unknown RULINGS_STORE=%s; using json store.", config.RULINGS_STORE)
    return JsonRulingStore()
