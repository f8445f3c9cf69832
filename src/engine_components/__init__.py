"""
Engine Components Package
Install, inspect and purge the containers of the source{d} engine CLI
"""

__version__ = "0.1.0"
__description__ = "Lifecycle management for the engine's container-based components"

__all__ = [
    '__version__',
    '__description__'
]
