"""
Input Adapters: reference FASTA, variant tables and excluded positions.

This module converts the on-disk formats into the internal models:
- FASTA records become a ReferenceGenome (via pysam).
- Variant table rows become VariantRecord objects, with 1-based positions.
- Excluded-position ranges become a set of PositionKey.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pysam

from ..core.kernel import CoordinateKernel
from ..exceptions import ReferenceGenomeError, VariantTableFormatError
from ..models.core import (
    HEADER_PREFIX,
    PositionKey,
    ReferenceGenome,
    ReferenceSequence,
    VariantRecord,
)

logger = logging.getLogger(__name__)

FASTA_SUFFIXES = (".fasta", ".fa", ".fna")


def reference_name(path: Path) -> str:
    """File name without its FASTA extension, used to name simulated genomes."""
    if path.suffix.lower() in FASTA_SUFFIXES:
        return path.stem
    return path.name


class FastaReader:
    """Reads every sequence of a FASTA file, in file order."""

    def __init__(self, path: Path):
        self.path = path

    def __iter__(self) -> Iterator[ReferenceSequence]:
        try:
            with pysam.FastxFile(str(self.path)) as fasta:
                for entry in fasta:
                    yield ReferenceSequence(name=entry.name, sequence=entry.sequence or "")
        except (OSError, ValueError) as e:
            raise ReferenceGenomeError(f"Could not parse reference file {self.path}: {e}") from e

    def read(self) -> ReferenceGenome:
        """
        Load the whole genome into memory.

        Raises:
            ReferenceGenomeError: if the file is unreadable or holds no sequences.
        """
        sequences = tuple(self)
        if not sequences:
            raise ReferenceGenomeError(f"No sequences found in reference file {self.path}")
        genome = ReferenceGenome(name=reference_name(self.path), sequences=sequences)
        logger.debug(
            "Read %d sequence(s), %d bases from %s", len(sequences), genome.length, self.path
        )
        return genome


def read_reference_genome(path: Path) -> ReferenceGenome:
    return FastaReader(path).read()


def iter_text_lines(path: str | Path) -> Iterator[tuple[int, str]]:
    """
    Yield 1-based ``(line_number, line)`` pairs with the terminator stripped.

    Lines are decoded one at a time so an undecodable byte is reported on the
    line that holds it.

    Raises:
        VariantTableFormatError: a line is not valid UTF-8.
    """
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise VariantTableFormatError(
                    f"Line is not valid UTF-8 ({e.reason} at byte {e.start})",
                    path=path,
                    line_number=line_number,
                ) from e
            yield line_number, line.rstrip("\r\n")


class VariantTableReader:
    """
    Reads a tab-separated variant table.

    The first line is the header and must start with ``#``; genome names
    start at its fifth column. Every following non-blank line is parsed into
    a VariantRecord.
    """

    def __init__(self, path: str | Path):
        self.path = path
        self.header = self._read_header()

    @property
    def genome_names(self) -> list[str]:
        return self.header.split("\t")[4:]

    def _read_header(self) -> str:
        lines = iter_text_lines(self.path)
        try:
            _, header = next(lines, (1, ""))
        except OSError as e:
            raise VariantTableFormatError(f"Could not open {self.path}: {e}") from e
        finally:
            lines.close()
        if not header.startswith(HEADER_PREFIX):
            raise VariantTableFormatError(
                "Error with header line", path=self.path, line_number=1, line=header
            )
        return header

    def __iter__(self) -> Iterator[VariantRecord]:
        for line_number, line in iter_text_lines(self.path):
            if line_number == 1 or not line.strip():
                continue
            yield self.parse_line(line, line_number)

    def parse_line(self, line: str, line_number: int | None = None) -> VariantRecord:
        """
        Parse one data row.

        Raises:
            VariantTableFormatError: missing chromosome/position/status or a
                non-numeric position.
        """
        tokens = line.split("\t")
        if len(tokens) < 2 or not tokens[0]:
            raise VariantTableFormatError(
                "Error with line", path=self.path, line_number=line_number, line=line
            )
        try:
            position = CoordinateKernel.parse_position(tokens[1])
        except ValueError as e:
            raise VariantTableFormatError(
                f"Error with line, {e}", path=self.path, line_number=line_number, line=line
            ) from e
        if len(tokens) < 3 or tokens[2] == "":
            raise VariantTableFormatError(
                "Error with line, status not properly defined",
                path=self.path,
                line_number=line_number,
                line=line,
            )

        chrom, _, status, *rest = tokens
        reference = rest[0] if rest else ""
        return VariantRecord(
            chromosome=chrom,
            position=position,
            status=status,
            reference=reference,
            bases=tuple(rest[1:]),
        )


class InvalidPositionsReader:
    """
    Reads positions to exclude (e.g. repeat regions).

    Format: tab-separated ``chromosome  start  [end]``, 1-based inclusive.
    Lines starting with ``#`` and blank lines are skipped; a line without
    an end names a single position.
    """

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> frozenset[PositionKey]:
        positions: set[PositionKey] = set()
        for line_number, line in iter_text_lines(self.path):
            if not line.strip() or line.startswith("#"):
                continue
            tokens = line.split("\t")
            try:
                chrom = tokens[0]
                start = CoordinateKernel.parse_position(tokens[1])
                end = CoordinateKernel.parse_position(tokens[2]) if len(tokens) > 2 else start
                positions.update(CoordinateKernel.expand_range(chrom, start, end))
            except (IndexError, ValueError) as e:
                raise VariantTableFormatError(
                    f"Invalid excluded-positions line: {e}",
                    path=self.path,
                    line_number=line_number,
                    line=line,
                ) from e
        logger.debug("Read %d excluded position(s) from %s", len(positions), self.path)
        return frozenset(positions)


def read_invalid_positions(path: Path) -> frozenset[PositionKey]:
    return InvalidPositionsReader(path).read()
