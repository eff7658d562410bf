"""Declarative filter classes for API query parameter filtering."""

from .user import UserFilter

__all__ = ["UserFilter"]
