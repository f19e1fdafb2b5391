"""
Data models for varbench.

Provides Pydantic models for variant tables, keys, configuration and results.
"""

from .core import (
    ColumnKey,
    ComparatorConfig,
    ComparisonResult,
    GeneratorConfig,
    MutationType,
    PositionKey,
    ReferenceGenome,
    ReferenceSequence,
    VariantRecord,
    VariantStatus,
    VariantTable,
)

__all__ = [
    "ColumnKey",
    "ComparatorConfig",
    "ComparisonResult",
    "GeneratorConfig",
    "MutationType",
    "PositionKey",
    "ReferenceGenome",
    "ReferenceSequence",
    "VariantRecord",
    "VariantStatus",
    "VariantTable",
]
