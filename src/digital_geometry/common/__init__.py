"""
Common modules shared by the kernel and the shapes.

Configuration and logging setup live here; no geometry.
"""

from .config import Config, DEFAULT_CONFIG, setup_logging

__all__ = [
    'Config', 'DEFAULT_CONFIG', 'setup_logging',
]
