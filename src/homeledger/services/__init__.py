"""Service module exports."""

from . import access, auth, bills, budgeting, notifications, portfolio, quotes

__all__ = [
    "access",
    "auth",
    "bills",
    "budgeting",
    "notifications",
    "portfolio",
    "quotes",
]
