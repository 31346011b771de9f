"""Binary sensor platform for Ring Alarm Panel."""

from .entities.binary_sensor import async_setup_entry

__all__ = ["async_setup_entry"]
