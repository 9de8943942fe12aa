"""
Utility helpers for the BloomSphere client.
"""

from src.bloomsphere.utils.env_loader import load_env

__all__ = [
    "load_env",
]
