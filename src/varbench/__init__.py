"""
varbench - A validation harness for variant-calling pipelines.

This package generates ground-truth variant tables with random
substitutions, insertions and deletions, and scores a pipeline's detected
variants against them with a column-level confusion matrix.

Example usage:
    $ varbench generate --reference ref.fasta --num-genomes 4 \
        --num-substitutions 100 --num-insertions 5 --num-deletions 5 > truth.tsv
    $ varbench compare --variants-true truth.tsv \
        --variants-detected detected.tsv --reference-genome ref.fasta
"""

__version__ = "0.3.0"

from .comparator import compare_tables, get_comparisons
from .generator import VariantTableGenerator
from .models.core import (
    ColumnKey,
    ComparatorConfig,
    ComparisonResult,
    GeneratorConfig,
    PositionKey,
    VariantRecord,
    VariantTable,
)
from .pipeline import ComparatorPipeline, GeneratorPipeline

__all__ = [
    "__version__",
    "ColumnKey",
    "ComparatorConfig",
    "ComparatorPipeline",
    "ComparisonResult",
    "GeneratorConfig",
    "GeneratorPipeline",
    "PositionKey",
    "VariantRecord",
    "VariantTable",
    "VariantTableGenerator",
    "compare_tables",
    "get_comparisons",
]
