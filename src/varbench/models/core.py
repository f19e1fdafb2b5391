"""
Core data models for varbench.
"""

from enum import Enum
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DNA_BASES = ("A", "C", "G", "T")
DELETION_SENTINEL = "-"
HEADER_PREFIX = "#"
TABLE_COLUMNS = ("#Chromosome", "Position", "Status", "Reference")


class MutationType(str, Enum):
    """Kind of mutation encoded by a status suffix."""
    SUBSTITUTION = "substitution"
    INSERTION = "insertion"
    DELETION = "deletion"


class VariantStatus(str, Enum):
    """Status values written by the table generator."""
    VALID = "valid"
    DELETION = "deletion"
    INSERTION = "insertion"


class PositionKey(NamedTuple):
    """A genomic coordinate, independent of the bases observed there."""
    chromosome: str
    position: int  # 1-based


class ColumnKey(NamedTuple):
    """
    A coordinate plus its full base pattern.

    ``bases`` is ``(reference, genome_0, genome_1, ...)``. Two rows are the
    same call only if the coordinate and every base agree.
    """
    chromosome: str
    position: int
    bases: tuple[str, ...]


class ReferenceSequence(BaseModel):
    """One named sequence (chromosome/contig) of a reference genome."""
    model_config = ConfigDict(frozen=True)

    name: str
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)


class ReferenceGenome(BaseModel):
    """
    A named, ordered collection of reference sequences.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    sequences: tuple[ReferenceSequence, ...]

    @property
    def length(self) -> int:
        """Total genome size: the sum of all sequence lengths."""
        return sum(seq.length for seq in self.sequences)

    @property
    def sequence_names(self) -> list[str]:
        return [seq.name for seq in self.sequences]

    def base_at(self, chromosome: str, position: int) -> str:
        """Return the reference base at a 1-based position."""
        for seq in self.sequences:
            if seq.name == chromosome:
                return seq.sequence[position - 1]
        raise KeyError(chromosome)


class VariantRecord(BaseModel):
    """
    One row of a variant table.

    ``bases`` holds one entry per genome column, in header order.
    """
    model_config = ConfigDict(frozen=True)

    chromosome: str = Field(min_length=1)
    position: int = Field(ge=1, description="1-based position")
    status: str = Field(min_length=1)
    reference: str = ""
    bases: tuple[str, ...] = ()

    @property
    def position_key(self) -> PositionKey:
        return PositionKey(self.chromosome, self.position)

    @property
    def column_key(self) -> ColumnKey:
        return ColumnKey(self.chromosome, self.position, (self.reference, *self.bases))

    @property
    def is_valid(self) -> bool:
        """Exact ``valid`` status, the rule applied to detected tables."""
        return self.status == VariantStatus.VALID.value

    @property
    def is_valid_prefixed(self) -> bool:
        """Any status beginning with ``valid``, the rule applied to ground truth."""
        return self.status.startswith(VariantStatus.VALID.value)

    @property
    def mutation_type(self) -> MutationType | None:
        """Mutation type tagged by the status suffix, if any."""
        for mtype in MutationType:
            if self.status.endswith(mtype.value):
                return mtype
        return None

    def to_fields(self) -> list[str]:
        return [self.chromosome, str(self.position), self.status, self.reference, *self.bases]


class VariantTable(BaseModel):
    """
    A header (genome names) plus its rows.
    """
    genome_names: list[str]
    records: list[VariantRecord] = Field(default_factory=list)

    @property
    def header(self) -> str:
        return "\t".join([*TABLE_COLUMNS, *self.genome_names])

    @property
    def position_keys(self) -> set[PositionKey]:
        return {r.position_key for r in self.records}

    def sorted(self) -> "VariantTable":
        """Return a copy ordered by chromosome, then position."""
        ordered = sorted(self.records, key=lambda r: (r.chromosome, r.position))
        return VariantTable(genome_names=list(self.genome_names), records=ordered)

    def __len__(self) -> int:
        return len(self.records)


class ComparisonResult(BaseModel):
    """
    Confusion matrix over genome columns plus its derived rates.
    """
    true_variant_columns: int
    true_nonvariant_columns: int
    columns_detected: int
    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int
    accuracy: float
    specificity: float
    sensitivity: float
    precision: float
    fp_rate: float


def _require_existing(v: str | Path | None) -> str | Path | None:
    if v is not None and not Path(v).exists():
        raise ValueError(f"File not found: {v}")
    return v


class GeneratorConfig(BaseModel):
    """
    Parameters for one ``generate`` run.
    """
    reference: Path
    num_genomes: int = Field(ge=1)
    num_substitutions: int = Field(default=0, ge=0)
    num_insertions: int = Field(default=0, ge=0)
    num_deletions: int = Field(default=0, ge=0)
    random_seed: int = 42
    exclude_positions: Path | None = None

    # Output
    output: Path | None = None  # None writes to stdout
    sort: bool = False

    @field_validator("reference", "exclude_positions")
    @classmethod
    def validate_file_exists(cls, v: Path | None) -> Path | None:
        return _require_existing(v)

    @property
    def num_variants(self) -> int:
        return self.num_substitutions + self.num_insertions + self.num_deletions


class ComparatorConfig(BaseModel):
    """
    Parameters for one ``compare`` run.

    Input paths are kept exactly as given so the report echoes them verbatim.
    """
    variants_true: str
    variants_detected: str
    reference_genome: str
    exclude_positions: Path | None = None

    # Output
    output: Path | None = None  # None writes to stdout
    by_type: bool = False

    @field_validator("variants_true", "variants_detected", "reference_genome", "exclude_positions")
    @classmethod
    def validate_file_exists(cls, v: str | Path | None) -> str | Path | None:
        return _require_existing(v)
