"""
Output Writers: variant tables and comparison reports.

Both writers emit tab-separated text to an already-open handle, which is
standard output unless an output path was given.
"""

import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from ..models.core import ComparisonResult, MutationType, VariantRecord, VariantTable

REPORT_NAMES = (
    "True_Variant_Columns",
    "True_Nonvariant_Columns",
    "Columns_Detected",
    "TP",
    "FP",
    "TN",
    "FN",
    "Accuracy",
    "Specificity",
    "Sensitivity",
    "Precision",
    "FP_Rate",
)


def format_metric(value: float) -> str:
    return f"{value:0.4f}"


@contextmanager
def open_output(path: Path | None) -> Iterator[TextIO]:
    """Yield a handle on ``path``, or on standard output when ``path`` is None."""
    if path is None:
        yield sys.stdout
        sys.stdout.flush()
        return
    with open(path, "w") as f:
        yield f


class OutputWriter:
    """Base class for writers bound to a text handle."""

    def __init__(self, handle: TextIO):
        self.handle = handle

    def _write_row(self, fields) -> None:
        self.handle.write("\t".join(str(f) for f in fields) + "\n")


class VariantTableWriter(OutputWriter):
    """Writes a variant table: the ``#`` header, then one row per record."""

    def write_header(self, table: VariantTable) -> None:
        self.handle.write(table.header + "\n")

    def write_record(self, record: VariantRecord) -> None:
        self._write_row(record.to_fields())

    def write(self, table: VariantTable) -> None:
        self.write_header(table)
        for record in table.records:
            self.write_record(record)


class ReportWriter(OutputWriter):
    """Writes the comparison report."""

    def write_inputs(
        self,
        reference_file: str | Path,
        reference_size: int,
        variants_true_file: str | Path,
        variants_detected_file: str | Path,
    ) -> None:
        self._write_row(["Reference_Genome_File", reference_file])
        self._write_row(["Reference_Genome_Size", reference_size])
        self._write_row(["Variants_True_File", variants_true_file])
        self._write_row(["Variants_Detected_File", variants_detected_file])

    @staticmethod
    def result_values(result: ComparisonResult) -> list[str]:
        return [
            str(result.true_variant_columns),
            str(result.true_nonvariant_columns),
            str(result.columns_detected),
            str(result.true_positives),
            str(result.false_positives),
            str(result.true_negatives),
            str(result.false_negatives),
            format_metric(result.accuracy),
            format_metric(result.specificity),
            format_metric(result.sensitivity),
            format_metric(result.precision),
            format_metric(result.fp_rate),
        ]

    def write_result(self, result: ComparisonResult) -> None:
        self._write_row(REPORT_NAMES)
        self._write_row(self.result_values(result))

    def write_by_type(self, results: Mapping[MutationType, ComparisonResult]) -> None:
        """One row per mutation type, under a ``Variant_Type`` names row."""
        if not results:
            return
        self._write_row(["Variant_Type", *REPORT_NAMES])
        for mtype, result in results.items():
            self._write_row([mtype.value, *self.result_values(result)])
