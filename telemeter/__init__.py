"""Telemeter: metric stores and remote write forwarding."""

__version__ = "0.1.0"
