"""
Pipeline Orchestrators: run one ``generate`` or ``compare`` invocation.

GeneratorPipeline:
1. Read the reference genome (and excluded positions, if any).
2. Generate the variant table with a seeded random generator.
3. Write the table to the requested output.

ComparatorPipeline:
1. Read the reference genome to get its size.
2. Read and compare the ground-truth and detected tables.
3. Write the report to the requested output.
"""

import logging
import random
from pathlib import Path

from .comparator import ComparisonReport, compare_tables
from .generator import VariantTableGenerator
from .io.input import read_invalid_positions, read_reference_genome
from .io.output import ReportWriter, VariantTableWriter, open_output
from .models.core import ComparatorConfig, GeneratorConfig, VariantTable
from .utils.logging import timed

logger = logging.getLogger(__name__)


class GeneratorPipeline:
    def __init__(self, config: GeneratorConfig):
        self.config = config

    def run(self) -> VariantTable:
        """Generate and write the table; returns it for callers that need it."""
        config = self.config

        with timed("Reading reference genome", logger, level=logging.INFO):
            reference = read_reference_genome(config.reference)
        logger.debug("Sequences: %s", ", ".join(reference.sequence_names))

        excluded = None
        if config.exclude_positions is not None:
            logger.info("Will exclude all positions in %s", config.exclude_positions)
            excluded = read_invalid_positions(config.exclude_positions)

        generator = VariantTableGenerator(
            reference,
            num_genomes=config.num_genomes,
            rng=random.Random(config.random_seed),
            excluded=excluded,
        )
        logger.info(
            "Generating %d variant position(s) across %d genome(s)",
            config.num_variants,
            config.num_genomes,
        )
        table = generator.generate(
            num_substitutions=config.num_substitutions,
            num_insertions=config.num_insertions,
            num_deletions=config.num_deletions,
        )
        if config.sort:
            table = table.sorted()

        with open_output(config.output) as handle:
            VariantTableWriter(handle).write(table)

        logger.info(
            "Wrote %d variant row(s) for %d genome(s)", len(table), config.num_genomes
        )
        return table


class ComparatorPipeline:
    def __init__(self, config: ComparatorConfig):
        self.config = config

    def run(self) -> ComparisonReport:
        """Compare the tables and write the report."""
        config = self.config

        with timed("Reading reference genome", logger, level=logging.INFO):
            reference = read_reference_genome(Path(config.reference_genome))

        excluded = None
        if config.exclude_positions is not None:
            excluded = read_invalid_positions(config.exclude_positions)

        report = compare_tables(
            config.variants_true,
            config.variants_detected,
            reference,
            reference_file=config.reference_genome,
            by_type=config.by_type,
            positions_to_remove=excluded,
        )

        with open_output(config.output) as handle:
            writer = ReportWriter(handle)
            writer.write_inputs(
                report.reference_file,
                report.reference_size,
                report.variants_true_file,
                report.variants_detected_file,
            )
            writer.write_result(report.result)
            writer.write_by_type(report.by_type)

        return report
