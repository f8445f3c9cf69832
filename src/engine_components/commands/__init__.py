"""
CLI Commands Package
Component list, install, status and purge commands
"""

from . import components

__all__ = ['components']
