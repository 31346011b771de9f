"""Button platform for Ring Alarm Panel."""

from .entities.button import async_setup_entry

__all__ = ["async_setup_entry"]
