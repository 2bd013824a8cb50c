"""Configuration schema and validation for incgraph."""

from .schema import QuoteTypes, ScanConfig

__all__ = [
    "QuoteTypes",
    "ScanConfig",
]
