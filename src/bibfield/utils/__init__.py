"""Common utility functions for bibfield."""

from bibfield.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
