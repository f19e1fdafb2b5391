"""
CLI Entry Point: Exposes the varbench generator and comparator via command line.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.markup import escape

from . import __version__
from .exceptions import VarbenchError
from .models.core import ComparatorConfig, GeneratorConfig
from .pipeline import ComparatorPipeline, GeneratorPipeline
from .utils.logging import get_console, get_logger, setup_logging

app = typer.Typer(
    help="varbench: validate a variant-calling pipeline against simulated ground truth"
)

logger = get_logger(__name__)

DEFAULT_RANDOM_SEED = 42


@app.callback()
def main():
    """
    varbench: validate a variant-calling pipeline against simulated ground truth
    """
    pass


def _fail(e: Exception) -> typer.Exit:
    get_console().print(f"[bold red]Error:[/bold red] {escape(str(e))}")
    return typer.Exit(code=1)


@app.command()
def version():
    """Print the varbench version."""
    typer.echo(f"varbench {__version__}")


@app.command()
def generate(
    reference: Path = typer.Option(..., "--reference", help="Reference genome in FASTA format"),
    num_genomes: int = typer.Option(
        ..., "--num-genomes", min=1, help="Number of genomes to include in the table"
    ),
    num_substitutions: int = typer.Option(
        ..., "--num-substitutions", min=0, help="Number of substitution positions to generate"
    ),
    num_insertions: int = typer.Option(
        ..., "--num-insertions", min=0, help="Number of insertion positions to generate"
    ),
    num_deletions: int = typer.Option(
        ..., "--num-deletions", min=0, help="Number of deletion positions to generate"
    ),
    random_seed: int | None = typer.Option(
        None,
        "--random-seed",
        help=f"Random seed for generating mutations (default {DEFAULT_RANDOM_SEED})",
    ),
    exclude_positions: Path | None = typer.Option(
        None,
        "--exclude-positions",
        help="Positions to exclude when placing variants (chromosome, start, end; 1-based)",
    ),
    sort: bool = typer.Option(False, "--sort", help="Sort rows by chromosome, then position"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the table here instead of standard output"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write a full debug log of the run to this file"
    ),
):
    """
    Generate a ground-truth variant table for a reference genome.
    """
    try:
        setup_logging(verbose, log_file)

        if random_seed is None:
            random_seed = DEFAULT_RANDOM_SEED
            logger.warning("--random-seed not defined, defaulting to %d", random_seed)

        config = GeneratorConfig(
            reference=reference,
            num_genomes=num_genomes,
            num_substitutions=num_substitutions,
            num_insertions=num_insertions,
            num_deletions=num_deletions,
            random_seed=random_seed,
            exclude_positions=exclude_positions,
            sort=sort,
            output=output,
        )
        GeneratorPipeline(config).run()

    except (VarbenchError, ValidationError, OSError) as e:
        raise _fail(e) from e


@app.command()
def compare(
    variants_true: str = typer.Option(..., "--variants-true", help="The true variants table"),
    variants_detected: str = typer.Option(
        ..., "--variants-detected", help="The detected variants table"
    ),
    reference_genome: str = typer.Option(
        ...,
        "--reference-genome",
        help="Reference genome in FASTA format, used for its length (true negatives)",
    ),
    by_type: bool = typer.Option(
        False, "--by-type", help="Also score each mutation type's valid columns separately"
    ),
    exclude_positions: Path | None = typer.Option(
        None,
        "--exclude-positions",
        help="Positions (e.g. repeats) to report ground-truth overlap for",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report here instead of standard output"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write a full debug log of the run to this file"
    ),
):
    """
    Compare detected variants against ground truth (TP/FP/TN/FN).
    """
    try:
        setup_logging(verbose, log_file)

        config = ComparatorConfig(
            variants_true=variants_true,
            variants_detected=variants_detected,
            reference_genome=reference_genome,
            exclude_positions=exclude_positions,
            by_type=by_type,
            output=output,
        )
        ComparatorPipeline(config).run()

    except (VarbenchError, ValidationError, OSError) as e:
        raise _fail(e) from e


if __name__ == "__main__":
    app()
