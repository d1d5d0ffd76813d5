"""Package-wide switch for progress reporting during training."""

import os

_enabled: bool = True


def enable_progress() -> None:
    """Enable progress bars for all zhpiece training runs."""
    global _enabled
    _enabled = True


def disable_progress() -> None:
    """Disable progress bars for all zhpiece training runs."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check if progress is enabled (respects env var override)."""
    if os.environ.get("ZHPIECE_DISABLE_PROGRESS", "").strip() == "1":
        return False
    return _enabled
