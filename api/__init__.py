"""
HTTP API package.
"""
from api.app import create_app
from api.handlers import SERVICE_KEY, register_handlers

__all__ = [
    "create_app",
    "register_handlers",
    "SERVICE_KEY",
]
