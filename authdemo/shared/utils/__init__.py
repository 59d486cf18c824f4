"""Small utility helpers."""

from authdemo.shared.utils.datetime import epoch_millis, ensure_utc, parse_timestamp, utc_now

__all__ = ["epoch_millis", "ensure_utc", "parse_timestamp", "utc_now"]
