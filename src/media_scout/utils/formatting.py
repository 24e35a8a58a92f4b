from typing import Optional


def human_readable_size(size_in_bytes: Optional[int], decimals: int = 1) -> Optional[str]:
    """Converts bytes to a human readable string (e.g. 10.5 MB); None if unknown."""
    if size_in_bytes is None:
        return None
    if size_in_bytes == 0:
        return "0 B"

    size = float(size_in_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.{decimals}f} {unit}"
        size /= 1024.0
    return f"{size:.{decimals}f} PB"
