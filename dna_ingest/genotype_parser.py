"""
Genotype Parser Module
Parses raw genotype exports from 23andMe, AncestryDNA, MyHeritage, FamilyTreeDNA
and generic CSV / tab-delimited files.
"""

import logging
from dataclasses import dataclass, field
from io import StringIO
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from .chromosomes import INVALID_CHROMOSOME, chromosome_sort_key, normalize_chromosome
from .formats import GenotypeFormat

logger = logging.getLogger(__name__)

SNP_COLUMNS = ['rsid', 'chromosome', 'position', 'genotype']

# Case-insensitive substrings used to locate each logical column in a header.
COLUMN_SYNONYMS = MappingProxyType({
    'rsid': ('rsid', 'snp', 'marker'),
    'chromosome': ('chr', 'chrom', 'chromosome'),
    'position': ('pos', 'location', 'position'),
    'genotype': ('genotype', 'result', 'call'),
    'allele1': ('allele1',),
    'allele2': ('allele2',),
})

NO_CALLS = frozenset(['', '--', '0'])

MAX_POSITION_TEXT = str(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class SnpRecord:
    """A single called SNP from a raw genotype file."""

    rsid: str
    chromosome: str
    position: int
    genotype: str


def empty_snps_frame() -> pd.DataFrame:
    """DataFrame with the standard SNP columns and no rows."""
    return pd.DataFrame({
        'rsid': pd.Series(dtype=str),
        'chromosome': pd.Series(dtype=str),
        'position': pd.Series(dtype='int64'),
        'genotype': pd.Series(dtype=str),
    })


def snps_to_frame(records: Iterable[SnpRecord]) -> pd.DataFrame:
    """Collect SnpRecords into a DataFrame with the standard SNP columns."""
    rows = [(r.rsid, r.chromosome, int(r.position), r.genotype) for r in records]
    if not rows:
        return empty_snps_frame()
    frame = pd.DataFrame(rows, columns=SNP_COLUMNS)
    frame['position'] = frame['position'].astype('int64')
    return frame


@dataclass
class ParsedGenotypes:
    """Result of parsing one raw genotype file."""

    snps: pd.DataFrame
    total_records: int = 0
    missing_columns: Tuple[str, ...] = ()
    metadata: Dict[str, str] = field(default_factory=dict)

    def __len__(self):
        return len(self.snps)

    @property
    def columns_resolved(self) -> bool:
        return not self.missing_columns

    def records(self) -> Iterator[SnpRecord]:
        """Yield each kept SNP as a SnpRecord."""
        for row in self.snps.itertuples(index=False):
            yield SnpRecord(row.rsid, row.chromosome, int(row.position), row.genotype)


@dataclass
class ConversionStats:
    """Aggregate counts for a raw-to-VCF conversion."""

    detected_format: GenotypeFormat
    sample_name: str
    total_records: int
    valid_snps: int
    chromosome_counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_parsed(cls, detected_format: GenotypeFormat, sample_name: str,
                    parsed: ParsedGenotypes) -> 'ConversionStats':
        counts = parsed.snps['chromosome'].value_counts().to_dict()
        return cls(
            detected_format=detected_format,
            sample_name=sample_name,
            total_records=parsed.total_records,
            valid_snps=len(parsed),
            chromosome_counts={str(k): int(v) for k, v in counts.items()},
        )

    @property
    def success_rate(self) -> float:
        if self.total_records == 0:
            return 0.0
        return self.valid_snps / self.total_records * 100

    def format_summary(self) -> str:
        lines = [
            "Raw DNA Conversion Statistics",
            "=" * 30,
            f"Detected Format: {self.detected_format.value}",
            f"Sample Name: {self.sample_name}",
            f"Total Records: {self.total_records:,}",
            f"Valid SNPs: {self.valid_snps:,}",
            f"Success Rate: {self.success_rate:.1f}%",
            "",
            "SNPs by Chromosome:",
        ]
        for chromosome in sorted(self.chromosome_counts, key=chromosome_sort_key):
            lines.append(f"   Chr {chromosome}: {self.chromosome_counts[chromosome]:,} SNPs")
        return "\n".join(lines)


class GenotypeParser:
    """
    Parser for raw genotype files with a single genotype column.

    The header is the first non-blank line that does not start with '#'.
    Columns are located by substring match against COLUMN_SYNONYMS, so the
    same parser reads 23andMe, MyHeritage and FamilyTreeDNA exports.
    """

    fields = ('rsid', 'chromosome', 'position', 'genotype')

    def __init__(self, delimiter: Optional[str] = None, positional_fallback: bool = True):
        """
        Args:
            delimiter: Field separator; None picks comma or tab from the header line
            positional_fallback: Use column order (0, 1, 2, ...) for fields the
                header does not name. When False, an unresolved field yields an
                empty result.
        """
        self.delimiter = delimiter
        self.positional_fallback = positional_fallback

    def parse(self, lines: Iterable[str]) -> ParsedGenotypes:
        """
        Parse genotype lines.

        Args:
            lines: Iterable of text lines (an open file works)

        Returns:
            ParsedGenotypes with columns: rsid, chromosome, position, genotype
        """
        metadata_lines = []
        header_line = None
        data_lines = []

        for line in lines:
            line = line.rstrip('\r\n')
            if not line.strip() or line.startswith('#'):
                if header_line is None and line.startswith('#'):
                    metadata_lines.append(line)
                continue
            if header_line is None:
                header_line = line
            else:
                data_lines.append(line)

        metadata = self._parse_metadata(metadata_lines)

        if header_line is None:
            return ParsedGenotypes(empty_snps_frame(), metadata=metadata)

        raw = self._read_table(header_line, data_lines, self._choose_delimiter(header_line))
        headers = [str(h).strip().lower() for h in raw.columns]
        columns, missing = self.resolve_columns(headers)

        if missing:
            logger.warning(f"Could not identify required columns: {', '.join(missing)}")
            return ParsedGenotypes(empty_snps_frame(), total_records=len(data_lines),
                                   missing_columns=tuple(missing), metadata=metadata)

        snps = self._build_frame(raw, columns)
        logger.info(f"Parsed {len(snps):,} of {len(data_lines):,} records")
        return ParsedGenotypes(snps, total_records=len(data_lines), metadata=metadata)

    def resolve_columns(self, headers: List[str]) -> Tuple[Dict[str, int], List[str]]:
        """
        Map each logical field to a column index.

        Returns:
            Tuple of (field -> index, unresolved field names)
        """
        columns = {}
        missing = []
        for position, name in enumerate(self.fields):
            synonyms = COLUMN_SYNONYMS[name]
            index = next(
                (i for i, header in enumerate(headers)
                 if any(synonym in header for synonym in synonyms)),
                None
            )
            if index is None:
                if self.positional_fallback:
                    index = position
                else:
                    missing.append(name)
                    continue
            columns[name] = index
        return columns, missing

    def _choose_delimiter(self, header_line: str) -> str:
        if self.delimiter is not None:
            return self.delimiter
        return ',' if ',' in header_line else '\t'

    def _parse_metadata(self, metadata_lines: List[str]) -> Dict[str, str]:
        """Extract 'key: value' pairs from comment lines."""
        metadata = {}
        for line in metadata_lines:
            if ':' in line:
                key_val = line.lstrip('#').split(':', 1)
                if len(key_val) == 2:
                    metadata[key_val[0].strip()] = key_val[1].strip()
        return metadata

    @staticmethod
    def _read_table(header_line: str, data_lines: List[str], delimiter: str) -> pd.DataFrame:
        """Tokenize the header and data lines; quoted fields may contain the delimiter."""
        text = '\n'.join([header_line] + data_lines)
        return pd.read_csv(
            StringIO(text),
            sep=delimiter,
            header=0,
            dtype=str,
            quotechar='"',
            keep_default_na=False,
            index_col=False,
        )

    def _build_frame(self, raw: pd.DataFrame, columns: Dict[str, int]) -> pd.DataFrame:
        if raw.empty:
            return empty_snps_frame()

        def column(name):
            index = columns[name]
            if index >= raw.shape[1]:
                return pd.Series('', index=raw.index)
            return raw.iloc[:, index].fillna('').astype(str).str.strip()

        df = pd.DataFrame({
            'rsid': column('rsid'),
            'chromosome': column('chromosome').map(normalize_chromosome),
            'position': self._parse_positions(column('position')),
            'genotype': self._genotypes(column),
        })

        keep = (df['chromosome'] != INVALID_CHROMOSOME) & ~df['genotype'].isin(NO_CALLS)
        keep &= self._keep_mask(column)
        return df[keep].reset_index(drop=True)

    @staticmethod
    def _parse_positions(values: pd.Series) -> pd.Series:
        # Anything that is not an unsigned integer within int64 range becomes position 0.
        digits = values.where(values.str.fullmatch(r'\d+'), '0').str.lstrip('0').replace('', '0')
        width = digits.str.len()
        fits = (width < len(MAX_POSITION_TEXT)) | (
            (width == len(MAX_POSITION_TEXT)) & (digits <= MAX_POSITION_TEXT)
        )
        return pd.to_numeric(digits.where(fits, '0')).astype('int64')

    def _genotypes(self, column) -> pd.Series:
        return column('genotype')

    def _keep_mask(self, column) -> pd.Series:
        return pd.Series(True, index=column('rsid').index)


class TwoAlleleParser(GenotypeParser):
    """
    Parser for AncestryDNA-style files that report each allele in its own column.
    The genotype is the two alleles concatenated in column order.
    """

    fields = ('rsid', 'chromosome', 'position', 'allele1', 'allele2')

    def _genotypes(self, column) -> pd.Series:
        return column('allele1') + column('allele2')

    def _keep_mask(self, column) -> pd.Series:
        return (column('allele1') != '0') & (column('allele2') != '0')


PARSERS = MappingProxyType({
    GenotypeFormat.TWENTY_THREE_AND_ME: GenotypeParser(),
    GenotypeFormat.ANCESTRY_DNA: TwoAlleleParser(),
    GenotypeFormat.MY_HERITAGE: GenotypeParser(),
    GenotypeFormat.FAMILY_TREE_DNA: GenotypeParser(),
    GenotypeFormat.CSV: GenotypeParser(delimiter=',', positional_fallback=False),
    GenotypeFormat.TAB: GenotypeParser(delimiter='\t', positional_fallback=False),
    GenotypeFormat.UNDETERMINED: GenotypeParser(delimiter=',', positional_fallback=False),
})


def parse_genotypes(genotype_format: GenotypeFormat, lines: Iterable[str]) -> ParsedGenotypes:
    """Parse genotype lines using the parser registered for the given format."""
    return PARSERS[genotype_format].parse(lines)


def parse_genotype_file(filepath: str, genotype_format: GenotypeFormat) -> ParsedGenotypes:
    """Parse a raw genotype file from disk."""
    logger.info(f"Reading {genotype_format.value} genotype file: {filepath}")
    with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
        return parse_genotypes(genotype_format, f)
