"""
Position Comparator: scores detected variants against a ground-truth table.

Both tables are reduced to sets of Column Keys (coordinate plus the full
reference/genome base pattern). A detected column is a true positive only if
the same column, bases included, is in the ground truth.

True negatives are not set-derived: they are the genome's non-variant
column count minus every detected column. This assumes detected columns are
distinct coordinates and does not re-check excluded positions.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ComparisonError, HeaderMismatchError
from .io.input import VariantTableReader
from .models.core import ColumnKey, ComparisonResult, MutationType, PositionKey, ReferenceGenome
from .utils.logging import log_call, timed

logger = logging.getLogger(__name__)


def _by_type() -> dict[MutationType, set]:
    return {mtype: set() for mtype in MutationType}


@dataclass
class TrueVariantSets:
    """Column and position sets of a ground-truth table."""

    header: str
    columns_all: set[ColumnKey] = field(default_factory=set)
    columns_valid: set[ColumnKey] = field(default_factory=set)
    columns_all_by_type: dict[MutationType, set[ColumnKey]] = field(default_factory=_by_type)
    columns_valid_by_type: dict[MutationType, set[ColumnKey]] = field(default_factory=_by_type)
    positions_all_by_type: dict[MutationType, set[PositionKey]] = field(default_factory=_by_type)

    # Split against an optional set of positions to mask
    columns_valid_removed_positions: set[ColumnKey] = field(default_factory=set)
    columns_removed_positions: set[ColumnKey] = field(default_factory=set)


@dataclass
class DetectedVariantSets:
    """Column and position sets of a detected-variants table."""

    header: str
    columns_all: set[ColumnKey] = field(default_factory=set)
    columns_valid: set[ColumnKey] = field(default_factory=set)
    columns_invalid: set[ColumnKey] = field(default_factory=set)
    positions_valid: set[PositionKey] = field(default_factory=set)
    positions_invalid: set[PositionKey] = field(default_factory=set)


@dataclass
class ComparisonReport:
    """Everything printed by ``varbench compare``."""

    reference_file: str | Path
    reference_size: int
    variants_true_file: str | Path
    variants_detected_file: str | Path
    result: ComparisonResult
    by_type: dict[MutationType, ComparisonResult] = field(default_factory=dict)
    truth: TrueVariantSets | None = None
    detected: DetectedVariantSets | None = None


def read_true_variants_table(
    path: str | Path, positions_to_remove: Iterable[PositionKey] | None = None
) -> TrueVariantSets:
    """
    Read a ground-truth table into column/position sets.

    Any status beginning with ``valid`` counts toward the valid sets. The
    mutation type comes from the status suffix (``substitution``,
    ``insertion`` or ``deletion``); statuses with none of these suffixes only
    land in the untyped sets.

    Args:
        path: Ground-truth table.
        positions_to_remove: Optional coordinates (e.g. repeats) used to fill
            ``columns_valid_removed_positions`` and ``columns_removed_positions``.
    """
    remove = frozenset(positions_to_remove or ())
    reader = VariantTableReader(path)
    logger.debug("Reading ground truth %s (genomes: %s)", path, ", ".join(reader.genome_names))
    sets = TrueVariantSets(header=reader.header)

    for record in reader:
        column = record.column_key
        mtype = record.mutation_type

        sets.columns_all.add(column)
        if mtype is not None:
            sets.columns_all_by_type[mtype].add(column)
            sets.positions_all_by_type[mtype].add(record.position_key)

        masked = record.position_key in remove
        if masked:
            sets.columns_removed_positions.add(column)

        if record.is_valid_prefixed:
            sets.columns_valid.add(column)
            if mtype is not None:
                sets.columns_valid_by_type[mtype].add(column)
            if not masked:
                sets.columns_valid_removed_positions.add(column)

    return sets


def read_detected_variants_table(path: str | Path) -> DetectedVariantSets:
    """
    Read a detected-variants table into column/position sets.

    Only the exact status ``valid`` is valid; every other status is invalid.
    """
    reader = VariantTableReader(path)
    logger.debug(
        "Reading detected variants %s (genomes: %s)", path, ", ".join(reader.genome_names)
    )
    sets = DetectedVariantSets(header=reader.header)

    for record in reader:
        column = record.column_key
        sets.columns_all.add(column)
        if record.is_valid:
            sets.columns_valid.add(column)
            sets.positions_valid.add(record.position_key)
        else:
            sets.columns_invalid.add(column)
            sets.positions_invalid.add(record.position_key)

    return sets


def _ratio(name: str, numerator: int, denominator: int) -> float:
    if denominator == 0:
        raise ComparisonError(f"Cannot compute {name}: denominator is zero")
    return numerator / denominator


def get_comparisons(
    true_columns: set[ColumnKey],
    detected_columns: set[ColumnKey],
    true_nonvariant_columns: int,
) -> ComparisonResult:
    """
    Confusion matrix of detected columns against ground-truth columns.

    Raises:
        ComparisonError: if a derived rate has a zero denominator.
    """
    tp = len(true_columns & detected_columns)
    fp = len(detected_columns - true_columns)
    fn = len(true_columns - detected_columns)
    tn = true_nonvariant_columns - len(detected_columns)

    return ComparisonResult(
        true_variant_columns=len(true_columns),
        true_nonvariant_columns=true_nonvariant_columns,
        columns_detected=len(detected_columns),
        true_positives=tp,
        false_positives=fp,
        true_negatives=tn,
        false_negatives=fn,
        accuracy=_ratio("Accuracy", tp + tn, tp + fp + tn + fn),
        specificity=_ratio("Specificity", tn, tn + fp),
        sensitivity=_ratio("Sensitivity", tp, tp + fn),
        precision=_ratio("Precision", tp, tp + fp),
        fp_rate=_ratio("FP_Rate", fp, tn + fp),
    )


def check_headers(truth: TrueVariantSets, detected: DetectedVariantSets) -> None:
    """
    Both tables must list the same genomes in the same order.

    The raw first lines are compared with only the line terminator removed,
    so a CRLF table and an LF table with the same header match; any other
    difference (case, whitespace, column order) is a mismatch.
    """
    if truth.header != detected.header:
        raise HeaderMismatchError(truth.header, detected.header)


@log_call()
def compare_tables(
    variants_true: str | Path,
    variants_detected: str | Path,
    reference: ReferenceGenome,
    reference_file: str | Path,
    by_type: bool = False,
    positions_to_remove: Iterable[PositionKey] | None = None,
) -> ComparisonReport:
    """
    Score a detected table against the ground truth.

    All ground-truth columns are scored against the detected ``valid``
    columns. With ``by_type``, each mutation type's valid ground-truth
    columns are also scored on their own.

    Raises:
        VariantTableFormatError: a table has a bad header or row.
        HeaderMismatchError: the two headers differ.
        ComparisonError: a derived rate has a zero denominator.
    """
    with timed("Reading ground-truth table", logger):
        truth = read_true_variants_table(variants_true, positions_to_remove)
    with timed("Reading detected table", logger):
        detected = read_detected_variants_table(variants_detected)

    check_headers(truth, detected)

    true_nonvariant_columns = reference.length - len(truth.columns_all)
    logger.info(
        "Ground truth: %d column(s); detected: %d valid, %d invalid column(s)",
        len(truth.columns_all),
        len(detected.columns_valid),
        len(detected.columns_invalid),
    )
    if positions_to_remove is not None:
        logger.info(
            "%d ground-truth column(s) fall in excluded positions",
            len(truth.columns_removed_positions),
        )

    result = get_comparisons(truth.columns_all, detected.columns_valid, true_nonvariant_columns)

    type_results: dict[MutationType, ComparisonResult] = {}
    if by_type:
        for mtype in MutationType:
            true_columns = truth.columns_valid_by_type[mtype]
            if not true_columns:
                logger.warning("No valid %s columns in ground truth, skipping", mtype.value)
                continue
            type_results[mtype] = get_comparisons(
                true_columns, detected.columns_valid, true_nonvariant_columns
            )

    return ComparisonReport(
        reference_file=reference_file,
        reference_size=reference.length,
        variants_true_file=variants_true,
        variants_detected_file=variants_detected,
        result=result,
        by_type=type_results,
        truth=truth,
        detected=detected,
    )
