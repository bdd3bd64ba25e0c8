"""Infrastructure - configuration and logging setup."""

from variantmatrix.infrastructure.config import Settings, settings
from variantmatrix.infrastructure.logging import configure_logging

__all__ = [
    "Settings",
    "configure_logging",
    "settings",
]
