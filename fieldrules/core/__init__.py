"""
fieldrules Core
===============

Configuration.
"""

from fieldrules.core.config import Config, ConfigSource

__all__ = ["Config", "ConfigSource"]
