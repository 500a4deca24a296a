"""
promflat configuration.

Pydantic-based settings read from PROMFLAT_ environment variables or a
.env file. Only the CLI consults them; library calls take explicit
arguments.
"""

from promflat.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
