"""Utility package."""

from .hash_utils import hash_string, generate_result_cache_key, generate_session_key
from .text_utils import sanitize_text_field

__all__ = ["hash_string", "generate_result_cache_key", "generate_session_key", "sanitize_text_field"]
