"""Etat observable de l'application."""

from .app_state import AppState, FetchKind, FetchStatus, user_message
from .observable import Observable

__all__ = ["AppState", "FetchKind", "FetchStatus", "Observable", "user_message"]
