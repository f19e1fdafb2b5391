"""
I/O module for varbench.

Provides readers for reference FASTA, variant tables and excluded positions,
and writers for variant tables and comparison reports.
"""

from .input import (
    FastaReader,
    InvalidPositionsReader,
    VariantTableReader,
    read_invalid_positions,
    read_reference_genome,
)
from .output import OutputWriter, ReportWriter, VariantTableWriter, open_output

__all__ = [
    "FastaReader",
    "InvalidPositionsReader",
    "OutputWriter",
    "ReportWriter",
    "VariantTableReader",
    "VariantTableWriter",
    "open_output",
    "read_invalid_positions",
    "read_reference_genome",
]
