"""
Quake Log Tools - Python package for Quake server log analysis

This package parses Quake server logs into per-match statistics
(kills, players, scores and causes of death) and renders them as
text reports, JSON/CSV/Excel exports and charts.

Configuration is read through the config module.
"""

__version__ = '1.0.0'
