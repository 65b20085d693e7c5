"""
Authentication Module
Admin API key dependency
"""

from app.auth.dependencies import require_admin

__all__ = [
    "require_admin",
]
