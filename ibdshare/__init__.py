"""Encoded IBD segments, segment sets, coverage counting, peak filtering and X_iR,s statistics."""

__version__ = "0.1.11"