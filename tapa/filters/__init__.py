"""Result filters."""

from .scope_filter import ScopeFilter

__all__ = ["ScopeFilter"]
