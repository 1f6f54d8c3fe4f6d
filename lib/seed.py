# =============================================================================
# lib/seed.py - Seed Data Loader
# =============================================================================
# Reads the initial application records from a JSON file once at startup.
#
# The file is a JSON array of objects with id, name, description and
# status. Entries that share an id are collapsed: the last occurrence
# wins but keeps the position of the first.
#
# Usage:
#   from lib.seed import load_seed_data
#   records = load_seed_data(settings.seed_data_file)
# =============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from core.models.application import Application
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class SeedDataError(ApplicationError):
    """Raised when the seed file is missing or doesn't contain valid records."""

    def __init__(self, path: Path, error: str):
        super().__init__(
            message=f"Failed to load seed data from {path}: {error}",
            code="SEED_DATA_ERROR",
            suggestion="Check SEED_DATA_PATH points to a JSON array of application records",
            details={"path": str(path), "error": error},
        )


def deduplicate(raw_records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Collapse records that share an id.

    Args:
        raw_records: Parsed JSON objects, in file order

    Returns:
        One record per id. The last occurrence's fields win; ordering
        follows each id's first appearance.
    """
    unique: dict[Any, dict[str, Any]] = {}
    for item in raw_records:
        unique[item.get("id")] = item
    return list(unique.values())


def parse_seed_data(raw: Any, path: Path) -> list[Application]:
    """Validate already-parsed JSON into deduplicated Application records."""
    if not isinstance(raw, list):
        raise SeedDataError(path, "expected a JSON array at the top level")

    if not all(isinstance(item, dict) for item in raw):
        raise SeedDataError(path, "every entry must be a JSON object")

    records = []
    for item in deduplicate(raw):
        try:
            records.append(Application.model_validate(item))
        except ValidationError as e:
            raise SeedDataError(path, f"invalid record {item.get('id')!r}: {e}")

    return records


def load_seed_data(path: str | Path) -> list[Application]:
    """
    Load and deduplicate seed records from a JSON file.

    Args:
        path: Path to the seed JSON file

    Returns:
        List of Application records

    Raises:
        SeedDataError: If the file can't be read, isn't JSON, or contains
            records that don't match the Application schema
    """
    path = Path(path)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SeedDataError(path, str(e))
    except json.JSONDecodeError as e:
        raise SeedDataError(path, f"invalid JSON: {e}")

    records = parse_seed_data(raw, path)
    logger.info(f"Loaded {len(records)} applications from {path} ({len(raw) - len(records)} duplicates dropped)")
    return records
