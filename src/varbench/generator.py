"""
Variant Table Generator: builds a ground-truth table of random variants.

Positions are drawn uniformly per sequence (every sequence is equally
likely, whatever its length), then uniformly within the sequence, until a
coordinate is found that is neither excluded nor already used. All mutation
types draw from one pool of used positions, so no two rows share a
coordinate.

Which base each simulated genome receives is decided by a per-genome
mutation policy. The default policies alternate mutated/unmutated genomes
so that every locus has a mix of variant and non-variant genomes.
"""

import logging
import random
from collections.abc import Callable, Iterable, Mapping

from .core.kernel import CoordinateKernel
from .exceptions import GeneratorError
from .models.core import (
    DELETION_SENTINEL,
    DNA_BASES,
    MutationType,
    PositionKey,
    ReferenceGenome,
    VariantRecord,
    VariantStatus,
    VariantTable,
)

logger = logging.getLogger(__name__)

# (reference base, genome index, rng) -> base or marker written for that genome
MutationPolicy = Callable[[str, int, random.Random], str]


def mutate_base(base: str, rng: random.Random) -> str:
    """Pick one of the DNA bases other than ``base``, uniformly."""
    base = base.upper()
    return rng.choice([b for b in DNA_BASES if b != base])


def substitution_policy(ref_base: str, index: int, rng: random.Random) -> str:
    """Even-indexed genomes get a mutated base, odd-indexed keep the reference."""
    if index % 2 == 0:
        return mutate_base(ref_base, rng)
    return ref_base


def deletion_policy(ref_base: str, index: int, rng: random.Random) -> str:
    """Genome 0 carries the deletion; the rest follow the substitution rule."""
    if index == 0:
        return DELETION_SENTINEL
    return substitution_policy(ref_base, index, rng)


def insertion_policy(ref_base: str, index: int, rng: random.Random) -> str:
    """Genome 0 carries a one-base insertion after the reference base."""
    if index == 0:
        return ref_base + mutate_base(ref_base, rng)
    return substitution_policy(ref_base, index, rng)


DEFAULT_POLICIES: dict[MutationType, MutationPolicy] = {
    MutationType.SUBSTITUTION: substitution_policy,
    MutationType.DELETION: deletion_policy,
    MutationType.INSERTION: insertion_policy,
}

STATUS_BY_TYPE = {
    MutationType.SUBSTITUTION: VariantStatus.VALID,
    MutationType.DELETION: VariantStatus.DELETION,
    MutationType.INSERTION: VariantStatus.INSERTION,
}


class VariantTableGenerator:
    """
    Generates a reproducible variant table for a reference genome.

    Args:
        reference: Genome to place variants on.
        num_genomes: Number of simulated genome columns.
        rng: Random generator owned by this instance. A fresh
            ``random.Random(42)`` is used when omitted.
        excluded: Position Keys that must never be used.
        policies: Per-mutation-type overrides of the default policies.
    """

    def __init__(
        self,
        reference: ReferenceGenome,
        num_genomes: int,
        rng: random.Random | None = None,
        excluded: Iterable[PositionKey] | None = None,
        policies: Mapping[MutationType, MutationPolicy] | None = None,
    ):
        if num_genomes < 1:
            raise GeneratorError(f"Number of genomes must be >= 1, got {num_genomes}")
        self.reference = reference
        self.num_genomes = num_genomes
        self.rng = rng if rng is not None else random.Random(42)
        self.excluded = frozenset(excluded or ())
        self.policies = {**DEFAULT_POLICIES, **(policies or {})}
        self._used: set[PositionKey] = set(self.excluded)

    @property
    def genome_names(self) -> list[str]:
        return [f"{self.reference.name}-{i}" for i in range(self.num_genomes)]

    def available_positions(self) -> int:
        """Number of genome coordinates that can still be picked."""
        lengths = {seq.name: seq.length for seq in self.reference.sequences}
        taken = sum(
            1 for key in self._used if 1 <= key.position <= lengths.get(key.chromosome, 0)
        )
        return self.reference.length - taken

    def pick_unique_position(self) -> tuple[str, int, str]:
        """
        Draw an unused, non-excluded coordinate and mark it used.

        Returns:
            (chromosome, 1-based position, upper-cased reference base)
        """
        sequences = self.reference.sequences
        while True:
            seq = sequences[self.rng.randrange(len(sequences))]
            if seq.length == 0:
                continue
            offset = self.rng.randrange(seq.length)
            key = CoordinateKernel.key_from_offset(seq.name, offset)
            if key not in self._used:
                break
        self._used.add(key)
        return key.chromosome, key.position, self.reference.base_at(*key).upper()

    def make_record(self, mutation_type: MutationType) -> VariantRecord:
        chrom, position, ref_base = self.pick_unique_position()
        policy = self.policies[mutation_type]
        bases = tuple(policy(ref_base, i, self.rng) for i in range(self.num_genomes))
        return VariantRecord(
            chromosome=chrom,
            position=position,
            status=STATUS_BY_TYPE[mutation_type].value,
            reference=ref_base,
            bases=bases,
        )

    def generate(
        self, num_substitutions: int = 0, num_insertions: int = 0, num_deletions: int = 0
    ) -> VariantTable:
        """
        Build a table with exactly the requested number of rows per type.

        Rows are emitted substitutions first, then deletions, then
        insertions, in draw order (not sorted).

        Raises:
            GeneratorError: if a count is negative or the genome does not
                have enough free positions.
        """
        counts = {
            MutationType.SUBSTITUTION: num_substitutions,
            MutationType.DELETION: num_deletions,
            MutationType.INSERTION: num_insertions,
        }
        for mtype, count in counts.items():
            if count < 0:
                raise GeneratorError(f"Number of {mtype.value}s must be >= 0, got {count}")

        requested = sum(counts.values())
        available = self.available_positions()
        if requested > available:
            raise GeneratorError(
                f"Requested {requested} unique positions but only {available} "
                f"non-excluded positions are free in {self.reference.name}"
            )

        table = VariantTable(genome_names=self.genome_names)
        for mtype, count in counts.items():
            for _ in range(count):
                table.records.append(self.make_record(mtype))
            logger.debug("Generated %d %s row(s)", count, mtype.value)
        return table
