"""Custom exceptions for varbench."""

from pathlib import Path


class VarbenchError(Exception):
    """Base exception for all varbench errors."""

    pass


class ReferenceGenomeError(VarbenchError):
    """The reference FASTA could not be read or holds no sequences."""

    pass


class VariantTableFormatError(VarbenchError):
    """A variant table has a bad header or a malformed row."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        line_number: int | None = None,
        line: str | None = None,
    ):
        super().__init__(message)
        self.path = path
        self.line_number = line_number
        self.line = line

    def __str__(self):
        msg = super().__str__()
        if self.path is not None:
            location = str(self.path)
            if self.line_number is not None:
                location += f":{self.line_number}"
            msg += f"\n  File: {location}"
        if self.line is not None:
            msg += f"\n  Line: {self.line}"
        return msg


class HeaderMismatchError(VarbenchError):
    """Ground-truth and detected tables do not list the same genomes in the same order."""

    def __init__(self, true_header: str, detected_header: str):
        super().__init__("Headers did not match")
        self.true_header = true_header
        self.detected_header = detected_header

    def __str__(self):
        return (
            f"{super().__str__()}\n"
            f"  True:     {self.true_header}\n"
            f"  Detected: {self.detected_header}"
        )


class ComparisonError(VarbenchError):
    """A derived metric cannot be computed (zero denominator)."""

    pass


class GeneratorError(VarbenchError):
    """A variant table cannot be generated with the requested parameters."""

    pass
