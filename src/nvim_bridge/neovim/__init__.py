from .client import NeovimClient

__all__ = ["NeovimClient"]
