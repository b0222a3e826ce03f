"""Exit-code constants used by the CLI layer.

Every exit path in slana uses one of these values.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The executor returned, or a slana command completed without error."""

GENERAL_ERROR: int = 1
"""A SlanaError was reported, or no command was given to a host tool."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped the ``slana`` script's error boundary."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
