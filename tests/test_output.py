"""Tests for the variant table and report writers."""

import io

from varbench.io.output import REPORT_NAMES, ReportWriter, VariantTableWriter, open_output
from varbench.models.core import ComparisonResult, MutationType, VariantRecord, VariantTable


def _result(**overrides) -> ComparisonResult:
    values = dict(
        true_variant_columns=2,
        true_nonvariant_columns=8,
        columns_detected=2,
        true_positives=1,
        false_positives=1,
        true_negatives=6,
        false_negatives=1,
        accuracy=7 / 9,
        specificity=6 / 7,
        sensitivity=0.5,
        precision=0.5,
        fp_rate=1 / 7,
    )
    values.update(overrides)
    return ComparisonResult(**values)


def test_table_writer():
    table = VariantTable(
        genome_names=["ref-0", "ref-1"],
        records=[
            VariantRecord(
                chromosome="chr1", position=4, status="insertion", reference="G", bases=("GT", "G")
            )
        ],
    )
    handle = io.StringIO()

    VariantTableWriter(handle).write(table)

    assert handle.getvalue() == (
        "#Chromosome\tPosition\tStatus\tReference\tref-0\tref-1\n"
        "chr1\t4\tinsertion\tG\tGT\tG\n"
    )


def test_report_layout():
    handle = io.StringIO()
    writer = ReportWriter(handle)

    writer.write_inputs("ref.fasta", 10, "truth.tsv", "detected.tsv")
    writer.write_result(_result())

    lines = handle.getvalue().splitlines()
    assert lines[:4] == [
        "Reference_Genome_File\tref.fasta",
        "Reference_Genome_Size\t10",
        "Variants_True_File\ttruth.tsv",
        "Variants_Detected_File\tdetected.tsv",
    ]
    assert lines[4].split("\t") == list(REPORT_NAMES)
    assert lines[5] == "2\t8\t2\t1\t1\t6\t1\t0.7778\t0.8571\t0.5000\t0.5000\t0.1429"


def test_by_type_block():
    handle = io.StringIO()
    ReportWriter(handle).write_by_type({MutationType.INSERTION: _result(precision=1.0)})

    names, values = handle.getvalue().splitlines()
    assert names.startswith("Variant_Type\tTrue_Variant_Columns")
    assert values.startswith("insertion\t2\t")
    assert values.split("\t")[11] == "1.0000"


def test_by_type_block_empty():
    handle = io.StringIO()
    ReportWriter(handle).write_by_type({})
    assert handle.getvalue() == ""


def test_open_output_to_file(temp_dir):
    path = temp_dir / "out.tsv"
    with open_output(path) as handle:
        handle.write("x\n")
    assert path.read_text() == "x\n"
