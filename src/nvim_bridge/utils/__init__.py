"""Utility modules."""

from .dependencies import (
    Dependency,
    DependencyError,
    check_dependencies_or_raise,
    neovim_dependency,
)

__all__ = [
    "Dependency",
    "DependencyError",
    "check_dependencies_or_raise",
    "neovim_dependency",
]
