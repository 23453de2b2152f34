"""Stage implementations for the telephone game."""

from .chain_runner import ChainRunner, validate_chain, error_marker, failed_result

__all__ = [
    "ChainRunner",
    "validate_chain",
    "error_marker",
    "failed_result"
]
