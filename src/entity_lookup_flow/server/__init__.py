"""HTTP API for the lookup step."""

from .app import create_app

__all__ = ["create_app"]
