"""Stub DNS resolver helpers: answer TTLs, name checks, host errors, dispatch and log formatting."""

__version__ = "0.1.0"