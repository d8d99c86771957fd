# Configuration package initialization
"""
Quake Log Tools - Configuration System

This package provides a lightweight configuration system for the Quake Log Tools.

Quick Usage:
    # Import the pre-configured instance
    from config import config

    value = config.get('paths.log_file')

    # Or create a custom instance
    from config import Config
    custom_config = Config(profile='my_server')
"""

from config.config import Config, config

__all__ = ['Config', 'config']
