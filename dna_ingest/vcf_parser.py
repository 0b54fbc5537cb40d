"""
VCF Parser Module
Loads plain or gzip-compressed VCF files into an in-memory variant dataset.
"""

import gzip
import logging
import threading
import zlib
from collections import Counter
from dataclasses import dataclass, field, replace
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple

import numpy as np

from .exceptions import SampleNotFoundError, VcfParseError, VcfReadError
from .reference_data import Population

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIXES = ('.gz', '.bgz')
MIN_VCF_FIELDS = 9
PROGRESS_INTERVAL = 10000


@dataclass(frozen=True)
class Variant:
    """One VCF data line. Genotypes are aligned with the dataset's sample order."""

    chromosome: str
    position: int
    id: str
    reference: str
    alternative: str
    quality: float
    genotypes: Tuple[str, ...]


@dataclass(frozen=True)
class VariantDataset:
    """
    Variants, samples and populations for one VCF + panel pair.

    Instances are never mutated after loading; attach a panel with
    with_populations(), which returns a new dataset. Per-sample genotype
    columns are built on first use into a lock-guarded cache, so a dataset
    can be shared across threads.
    """

    variants: Tuple[Variant, ...] = ()
    samples: Tuple[str, ...] = ()
    populations: Mapping[str, Population] = field(default_factory=dict)
    _columns: Dict[int, np.ndarray] = field(default_factory=dict, init=False, repr=False,
                                            compare=False)
    _columns_lock: Any = field(default_factory=threading.Lock, init=False, repr=False,
                               compare=False)

    def with_populations(self, populations: Mapping[str, Population]) -> 'VariantDataset':
        return replace(self, populations=dict(populations))

    @cached_property
    def _sample_positions(self) -> Dict[str, int]:
        positions = {}
        for index, sample in enumerate(self.samples):
            positions.setdefault(sample, index)
        return positions

    def has_sample(self, sample: str) -> bool:
        return sample in self._sample_positions

    def sample_index(self, sample: str) -> int:
        """Column index of a sample; raises SampleNotFoundError if absent."""
        try:
            return self._sample_positions[sample]
        except KeyError:
            raise SampleNotFoundError(sample) from None

    @cached_property
    def genotype_lengths(self) -> np.ndarray:
        """Number of genotype fields actually present on each variant."""
        return np.array([len(v.genotypes) for v in self.variants], dtype=np.int64)

    def sample_genotypes(self, index: int) -> np.ndarray:
        """
        Genotype strings of one sample column across all variants.

        Variants whose genotype row is too short hold an empty string; use
        genotype_lengths to tell them apart from real calls.
        """
        with self._columns_lock:
            column = self._columns.get(index)
            if column is None:
                column = np.array(
                    [v.genotypes[index] if index < len(v.genotypes) else ''
                     for v in self.variants],
                    dtype=str,
                )
                self._columns[index] = column
        return column

    def summary(self) -> Dict:
        """Counts of variants, samples and populations in the dataset."""
        chromosomes = Counter(v.chromosome for v in self.variants)
        return {
            'n_variants': len(self.variants),
            'n_samples': len(self.samples),
            'n_populations': len(self.populations),
            'variants_per_chromosome': dict(chromosomes),
            'samples_per_population': {
                code: len(pop.members) for code, pop in sorted(self.populations.items())
            },
        }


def _open_vcf(path: Path):
    if path.suffix.lower() in COMPRESSED_SUFFIXES:
        return gzip.open(path, 'rt', encoding='utf-8')
    return open(path, 'r', encoding='utf-8')


def _iter_lines(path: Path) -> Iterator[str]:
    try:
        with _open_vcf(path) as f:
            for line in f:
                yield line.rstrip('\r\n')
    except (gzip.BadGzipFile, EOFError, zlib.error) as e:
        raise VcfReadError(f"Failed to decompress VCF file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise VcfReadError(f"VCF file {path} is not valid UTF-8 text: {e}") from e


def parse_variant_line(line: str, path: str = None, line_number: int = None) -> Variant:
    """
    Build a Variant from a tab-separated VCF data line.

    Raises:
        VcfParseError: If POS is not an unsigned integer (an optional leading '+' is accepted)
    """
    fields = line.split('\t')
    if len(fields) < MIN_VCF_FIELDS:
        raise VcfParseError("Invalid VCF line format", path, line_number)

    pos = fields[1].strip()
    digits = pos[1:] if pos.startswith('+') else pos
    if not (digits.isascii() and digits.isdigit()):
        raise VcfParseError(f"Invalid POS value: {fields[1]!r}", path, line_number)

    try:
        quality = float(fields[5])
    except ValueError:
        quality = 0.0

    return Variant(
        chromosome=fields[0],
        position=int(digits),
        id=fields[2],
        reference=fields[3],
        alternative=fields[4],
        quality=quality,
        genotypes=tuple(fields[MIN_VCF_FIELDS:]),
    )


def parse_vcf_lines(lines: Iterable[str], path: str = '<lines>') -> VariantDataset:
    """Parse VCF text lines into a VariantDataset."""
    variants = []
    samples: Tuple[str, ...] = ()
    header_parsed = False
    line_count = 0

    for line_number, line in enumerate(lines, start=1):
        line_count = line_number
        if line.startswith('##'):
            continue

        if line.startswith('#CHROM'):
            if not header_parsed:
                samples = tuple(line.split('\t')[MIN_VCF_FIELDS:])
                header_parsed = True
            continue

        if line.startswith('#') or len(line.split('\t')) < MIN_VCF_FIELDS:
            continue

        variants.append(parse_variant_line(line, path, line_number))
        if len(variants) % PROGRESS_INTERVAL == 0:
            logger.debug(f"Processed {len(variants):,} variants...")

    logger.info(f"VCF parsing complete: {line_count:,} lines, "
                f"{len(variants):,} variants, {len(samples)} samples")
    return VariantDataset(variants=tuple(variants), samples=samples)


def parse_vcf(vcf_path) -> VariantDataset:
    """
    Parse a VCF file (.vcf, .vcf.gz or .vcf.bgz).

    Args:
        vcf_path: Path to the VCF file

    Returns:
        VariantDataset with no populations attached
    """
    path = Path(vcf_path)
    logger.info(f"Parsing VCF file: {path}")
    return parse_vcf_lines(_iter_lines(path), str(path))
