"""Typed models for Ring Alarm Panel configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from homeassistant.config_entries import ConfigEntry

from .const import (
    CONF_COMPACT_MODE,
    CONF_ENTITY,
    CONF_SHOW_STATE_TEXT,
    CONF_TITLE,
    CONF_VACATION_ENTITY,
    DEFAULT_COMPACT_MODE,
    DEFAULT_SHOW_STATE_TEXT,
    DEFAULT_TITLE,
)


@dataclass(frozen=True)
class PanelOptions:
    """Normalized entry data + options (options win)."""

    entity: str
    vacation_entity: str | None
    title: str
    show_state_text: bool
    compact_mode: bool

    @classmethod
    def from_entry(cls, entry: ConfigEntry) -> "PanelOptions":
        merged: dict[str, Any] = {**dict(entry.data), **dict(entry.options)}
        return cls(
            entity=str(merged.get(CONF_ENTITY, "")),
            vacation_entity=str(merged[CONF_VACATION_ENTITY]) if merged.get(CONF_VACATION_ENTITY) else None,
            title=str(merged.get(CONF_TITLE) or DEFAULT_TITLE),
            show_state_text=bool(merged.get(CONF_SHOW_STATE_TEXT, DEFAULT_SHOW_STATE_TEXT)),
            compact_mode=bool(merged.get(CONF_COMPACT_MODE, DEFAULT_COMPACT_MODE)),
        )

    def display(self) -> dict[str, Any]:
        """Display flags handed through to the view untouched."""
        return {
            CONF_TITLE: self.title,
            CONF_SHOW_STATE_TEXT: self.show_state_text,
            CONF_COMPACT_MODE: self.compact_mode,
        }
