"""Link cleaning: search redirect unwrapping and URL sanitization."""

from bibfield.links.sanitizer import clean_search_redirect, is_url, sanitize_url

__all__ = ["clean_search_redirect", "sanitize_url", "is_url"]
