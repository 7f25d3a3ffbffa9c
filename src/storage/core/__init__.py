"""Storage core library package."""

# Re-export exceptions module
from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
