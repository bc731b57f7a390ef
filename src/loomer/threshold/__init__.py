"""
Threshold Module
================

Apparent Looming Threshold extraction.
"""

from loomer.threshold.extractor import get_alt

__all__ = [
    "get_alt",
]
