"""Drivers for the PMSA003I particle sensor and the SGP30 gas sensor."""

__version__ = "0.1.0"
