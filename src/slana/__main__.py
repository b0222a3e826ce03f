"""Allow ``python -m slana`` invocation.

Delegates to the same error-boundary entry point as the ``slana``
console script.
"""

from __future__ import annotations

from slana.cli.app import cli

if __name__ == "__main__":
    cli()
