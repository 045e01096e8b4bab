"""Configuration loading for cloudflash."""

from .settings import CloudConfig

__all__ = [
    "CloudConfig",
]
