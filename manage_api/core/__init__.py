"""
Core module for the account management API.

Exports the main configuration component.
"""

from manage_api.core.config import settings

__all__ = [
    # Config
    "settings",
]
