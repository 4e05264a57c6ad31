"""Command line helpers for rendering VPN service profiles."""

from .config import ToolConfig, load_config  # noqa: F401

__all__ = [
    "ToolConfig",
    "load_config",
]
