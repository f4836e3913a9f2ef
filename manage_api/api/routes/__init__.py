"""
API routes for the account management API.

This package contains all API endpoint definitions organized by feature.
"""

from manage_api.api.routes import account, health, user_jwt

__all__ = ["account", "health", "user_jwt"]
