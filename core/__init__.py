"""Citizen services backend: issue reporting, waste pickups and the admin console."""

__version__ = "1.0.0"
