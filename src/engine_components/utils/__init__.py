"""
CLI Utils Package
Display and logging utilities
"""

from .display import (
    console,
    create_components_table,
    create_status_table,
    format_installed,
    show_purge_plan,
    create_progress_context
)
from .logger import (
    setup_logging,
    error_chain,
    log_exception,
    debug_print
)

__all__ = [
    'console',
    'create_components_table',
    'create_status_table',
    'format_installed',
    'show_purge_plan',
    'create_progress_context',
    'setup_logging',
    'error_chain',
    'log_exception',
    'debug_print'
]
