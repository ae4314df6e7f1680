"""
Parsing helpers for loosely structured agent output.
"""

from .lenient_json import ExtractionError, extract, extract_with_repair

__all__ = [
    "ExtractionError",
    "extract",
    "extract_with_repair",
]
