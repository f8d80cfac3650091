"""Shell escaping of free-form comment arguments."""

from __future__ import annotations


def escape_args(args: list[str]) -> list[str]:
    """Prefix every character of every argument with a backslash."""
    return ["".join(f"\\{c}" for c in arg) for arg in args]
