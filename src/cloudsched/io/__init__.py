"""cloudsched input/output utilities.

Text and JSON reporting of scheduler state.
"""

from cloudsched.io.formatter import ReportFormatter

__all__ = [
    "ReportFormatter",
]
