"""
Exceptions Module
Error types raised while ingesting genotype files and VCF datasets.
"""


class DnaIngestError(Exception):
    """Base class for all pipeline errors."""


class GenotypeFormatError(DnaIngestError, ValueError):
    """Required columns could not be resolved in a genotype file."""

    def __init__(self, message: str, missing_columns=()):
        super().__init__(message)
        self.missing_columns = tuple(missing_columns)


class VcfReadError(DnaIngestError, OSError):
    """A VCF file could not be read or decompressed."""


class VcfParseError(DnaIngestError, ValueError):
    """A structurally required VCF field could not be parsed."""

    def __init__(self, message: str, path: str = None, line_number: int = None):
        if path is not None and line_number is not None:
            message = f"{path}:{line_number}: {message}"
        super().__init__(message)
        self.path = path
        self.line_number = line_number


class SampleNotFoundError(DnaIngestError, KeyError):
    """A sample name is not present in the loaded VCF."""

    def __init__(self, sample: str):
        super().__init__(sample)
        self.sample = sample

    def __str__(self):
        return f"Sample '{self.sample}' not found in VCF file"


class ManualEntryError(DnaIngestError, ValueError):
    """A manually entered SNP line is invalid."""
