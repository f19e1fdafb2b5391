"""Pytest configuration and fixtures."""

import sys
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

TABLE_HEADER = "#Chromosome\tPosition\tStatus\tReference\tref-0\tref-1"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _write_fasta(path: Path, sequences: dict[str, str]) -> Path:
    with open(path, "w") as f:
        for name, seq in sequences.items():
            f.write(f">{name}\n")
            for i in range(0, len(seq), 60):
                f.write(seq[i : i + 60] + "\n")
    return path


@pytest.fixture
def sample_fasta(temp_dir: Path) -> Path:
    """Two-contig reference, 10 bases in total."""
    return _write_fasta(temp_dir / "ref.fasta", {"chr1": "ACGTAC", "chr2": "GGCC"})


@pytest.fixture
def larger_fasta(temp_dir: Path) -> Path:
    """Three contigs of different lengths, 320 bases in total."""
    return _write_fasta(
        temp_dir / "genome.fasta",
        {
            "contig1": "ACGT" * 50,
            "contig2": "TTGACCAGTA" * 10,
            "contig3": "GATTACA" * 2 + "GCGCGC",
        },
    )


@pytest.fixture
def fasta_writer(temp_dir: Path) -> Callable[[str, dict[str, str]], Path]:
    """Write an arbitrary FASTA under the temporary directory."""

    def _write(name: str, sequences: dict[str, str]) -> Path:
        return _write_fasta(temp_dir / name, sequences)

    return _write


@pytest.fixture
def table_writer(temp_dir: Path) -> Callable[..., Path]:
    """Write a variant table from rows of fields; the header defaults to two genomes."""

    def _write(name: str, rows: list[list[str]], header: str = TABLE_HEADER) -> Path:
        path = temp_dir / name
        with open(path, "w") as f:
            f.write(header + "\n")
            for row in rows:
                f.write("\t".join(row) + "\n")
        return path

    return _write
