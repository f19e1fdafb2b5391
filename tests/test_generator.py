"""
Tests for the variant table generator.
"""

import random

import pytest

from varbench.exceptions import GeneratorError
from varbench.generator import (
    VariantTableGenerator,
    deletion_policy,
    insertion_policy,
    mutate_base,
    substitution_policy,
)
from varbench.io.input import read_reference_genome
from varbench.models.core import DELETION_SENTINEL, DNA_BASES, MutationType, PositionKey


@pytest.fixture
def genome(larger_fasta):
    return read_reference_genome(larger_fasta)


def _generate(genome, seed=42, num_genomes=5, excluded=None, counts=(30, 10, 10)):
    generator = VariantTableGenerator(
        genome, num_genomes=num_genomes, rng=random.Random(seed), excluded=excluded
    )
    subs, ins, dels = counts
    return generator.generate(num_substitutions=subs, num_insertions=ins, num_deletions=dels)


def _rows(table, status):
    return [r for r in table.records if r.status == status]


def test_requested_counts_and_unique_positions(genome):
    table = _generate(genome)

    assert len(table) == 50
    assert len(table.position_keys) == 50
    assert len(_rows(table, "valid")) == 30
    assert len(_rows(table, "insertion")) == 10
    assert len(_rows(table, "deletion")) == 10


def test_same_seed_same_table(genome):
    first = _generate(genome, seed=7)
    second = _generate(genome, seed=7)
    other = _generate(genome, seed=8)

    assert first.records == second.records
    assert first.records != other.records


def test_rows_follow_generation_order(genome):
    statuses = [r.status for r in _generate(genome).records]
    assert statuses == ["valid"] * 30 + ["deletion"] * 10 + ["insertion"] * 10


def test_reference_base_matches_genome(genome):
    for record in _generate(genome).records:
        assert record.reference == genome.base_at(record.chromosome, record.position).upper()


def test_substitution_rows_alternate(genome):
    for record in _rows(_generate(genome), "valid"):
        for i, base in enumerate(record.bases):
            if i % 2 == 0:
                assert base in DNA_BASES
                assert base != record.reference
            else:
                assert base == record.reference


def test_deletion_and_insertion_rows(genome):
    table = _generate(genome)

    for record in _rows(table, "deletion"):
        assert record.bases[0] == DELETION_SENTINEL
        assert record.bases[1] == record.reference
        assert record.bases[2] != record.reference

    for record in _rows(table, "insertion"):
        inserted = record.bases[0]
        assert len(inserted) == 2
        assert inserted[0] == record.reference
        assert inserted[1] != record.reference
        assert record.bases[3] == record.reference


def test_excluded_positions_are_never_used(genome):
    # Everything in contig1 except its last 20 bases is excluded
    excluded = {PositionKey("contig1", p) for p in range(1, 181)}

    table = _generate(genome, excluded=excluded, counts=(40, 5, 5))

    assert not table.position_keys & excluded


def test_genome_names_come_from_reference(genome):
    table = _generate(genome, num_genomes=3)
    assert table.genome_names == ["genome-0", "genome-1", "genome-2"]
    assert table.header == (
        "#Chromosome\tPosition\tStatus\tReference\tgenome-0\tgenome-1\tgenome-2"
    )


def test_whole_genome_can_be_used(sample_fasta):
    genome = read_reference_genome(sample_fasta)
    table = _generate(genome, num_genomes=2, counts=(6, 2, 2))
    assert len(table.position_keys) == genome.length


def test_too_many_positions_raises(sample_fasta):
    genome = read_reference_genome(sample_fasta)
    excluded = {PositionKey("chr1", 1), PositionKey("chr9", 1)}

    generator = VariantTableGenerator(genome, num_genomes=2, excluded=excluded)
    # chr9 is not in the genome, so only one position is taken
    assert generator.available_positions() == 9

    with pytest.raises(GeneratorError, match="unique positions"):
        generator.generate(num_substitutions=10)


def test_custom_policy_replaces_default(genome):
    def all_mutated(ref_base, index, rng):
        return mutate_base(ref_base, rng)

    generator = VariantTableGenerator(
        genome,
        num_genomes=4,
        rng=random.Random(1),
        policies={MutationType.SUBSTITUTION: all_mutated},
    )
    table = generator.generate(num_substitutions=10, num_deletions=2)

    for record in _rows(table, "valid"):
        assert all(b != record.reference for b in record.bases)
    for record in _rows(table, "deletion"):
        assert record.bases[0] == DELETION_SENTINEL


@pytest.mark.parametrize("base", ["A", "C", "G", "T", "a"])
def test_mutate_base_never_returns_reference(base):
    rng = random.Random(3)
    draws = {mutate_base(base, rng) for _ in range(200)}
    assert draws == set(DNA_BASES) - {base.upper()}


def test_default_policies():
    rng = random.Random(0)
    assert substitution_policy("A", 1, rng) == "A"
    assert substitution_policy("A", 2, rng) != "A"
    assert deletion_policy("A", 0, rng) == "-"
    assert deletion_policy("A", 3, rng) == "A"
    assert insertion_policy("A", 0, rng).startswith("A")
    assert insertion_policy("A", 1, rng) == "A"


def test_num_genomes_must_be_positive(genome):
    with pytest.raises(GeneratorError):
        VariantTableGenerator(genome, num_genomes=0)
