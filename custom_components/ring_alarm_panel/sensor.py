"""Sensor platform for Ring Alarm Panel."""

from .entities.sensor import async_setup_entry

__all__ = ["async_setup_entry"]
