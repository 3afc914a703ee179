"""Threat-intelligence and BCM reporting dashboard."""

__version__ = "0.1.0"
