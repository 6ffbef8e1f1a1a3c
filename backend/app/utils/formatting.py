"""Presentation helpers shared by the API layer."""

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count for display, e.g. 1536 -> "1.5 KB".

    Uses 1024-based units and at most two decimals with trailing zeros dropped.
    """
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size_bytes / 1024 ** exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def truncate_text(text: str, limit: int = 100) -> str:
    """Cut text to `limit` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
