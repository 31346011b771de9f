"""Core runtime contracts for inbound snapshots and outbound commands."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .snapshot import RawSnapshot


class CommandError(Exception):
    """An outbound service call failed."""


@dataclass(frozen=True)
class SnapshotChanged:
    """A tracked entity changed; ``snapshot`` is None when the entity is gone."""

    entity_id: str
    snapshot: RawSnapshot | None
    ts: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass(frozen=True)
class ServiceCommand:
    """Single outbound service call."""

    domain: str
    service: str
    entity_id: str

    @property
    def data(self) -> dict[str, Any]:
        return {"entity_id": self.entity_id}


CommandRunner = Callable[[ServiceCommand], Awaitable[None]]
