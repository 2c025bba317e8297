"""Partition table loading (data-driven).

The built-in table lives in `core.domain.tables`. A JSON file can replace it
at startup, in either form:

- `{"partitions": [{"language_code": "IT", "partition_id": 166197610}, ...]}`
- `{"IT": 166197610, "EN": 391082834, ...}` (declaration order is kept)
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from core.config import AppSettings
from core.domain.errors import ConfigurationError
from core.domain.language import normalize_language_code
from core.domain.models import Partition
from core.domain.tables import PARTITION_TABLE


class PartitionTableFile(BaseModel):
    partitions: list[Partition] = Field(default_factory=list)


def load_partition_table(path: Path) -> tuple[Partition, ...]:
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read partition table {path}: {exc}") from exc

    if isinstance(data, dict) and "partitions" not in data:
        data = {
            "partitions": [
                {"language_code": code, "partition_id": board_id} for code, board_id in data.items()
            ]
        }

    try:
        table = PartitionTableFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid partition table {path}: {exc}") from exc

    if not table.partitions:
        raise ConfigurationError(f"Partition table {path} is empty.")

    return tuple(
        Partition(
            language_code=normalize_language_code(p.language_code),
            partition_id=p.partition_id,
        )
        for p in table.partitions
    )


def resolve_partitions(settings: AppSettings) -> tuple[Partition, ...]:
    """Partition table for this process: the configured file or the built-in one."""

    if settings.partition_table_path is None:
        return PARTITION_TABLE
    return load_partition_table(settings.partition_table_path)
