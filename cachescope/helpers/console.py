"""Console output shared by the cachescope commands."""

from __future__ import annotations

from rich.console import Console

# Cache IDs and scalar values are printed as-is, without rich's number/URL colouring
console = Console(highlight=False)


def truncate(text: str, max_len: int) -> str:
    """Fit *text* on one table line: collapse whitespace, then cut with '...'."""
    flat = " ".join(text.split())
    if len(flat) <= max_len:
        return flat
    if max_len <= 3:
        return flat[:max_len]
    return flat[: max_len - 3] + "..."
