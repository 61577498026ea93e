"""Permissions presentation layer - HTTP routes and API models."""

from permissions.presentation.routes import router

__all__ = ["router"]
