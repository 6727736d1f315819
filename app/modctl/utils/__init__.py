"""Utility modules for modctl.

This module exports commonly used utility functions.
"""

from modctl.utils.formatting import (
    console,
    create_mod_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_mod_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
