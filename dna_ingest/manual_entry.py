"""
Manual Entry Module
Builds a VCF from SNPs entered by hand, e.g. from a DIY genotyping kit.

Each entry is a comma-separated line:
    rsid,chromosome,position,genotype,confidence,method
    rs12913832,15,28365618,AG,0.8,phenotype
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .chromosomes import INVALID_CHROMOSOME, normalize_chromosome
from .exceptions import ManualEntryError
from .genotype_parser import SnpRecord, snps_to_frame
from .vcf_writer import VcfWriter, sort_snps

logger = logging.getLogger(__name__)

MANUAL_ENTRY_SOURCE = 'dna_ingest_ManualEntry'
VALID_BASES = frozenset('ACGT')

# rsid, chromosome, position, trait
DIY_KIT_MARKERS = (
    ('rs12913832', '15', 28365618, 'Eye color (HERC2)'),
    ('rs1805007', '16', 89986091, 'Red hair (MC1R)'),
    ('rs4988235', '2', 136608646, 'Lactose tolerance'),
    ('rs17822931', '16', 48258198, 'Earwax type (ABCC11)'),
    ('rs6152', '12', 56372758, 'Hair texture'),
    ('rs3827760', '7', 2723432, 'European ancestry'),
    ('rs2814778', '1', 202136319, 'African ancestry'),
    ('rs671', '12', 112241766, 'Asian ancestry'),
    ('rs1426654', '15', 48426484, 'Skin pigmentation'),
    ('rs16891982', '5', 33951693, 'Eye color (SLC45A2)'),
)


@dataclass(frozen=True)
class ManualSnpEntry:
    rsid: str
    chromosome: str
    position: int
    genotype: str
    confidence: float
    method: str

    def to_record(self) -> SnpRecord:
        return SnpRecord(self.rsid, self.chromosome, self.position, self.genotype)


def parse_manual_entry(line: str) -> ManualSnpEntry:
    """
    Parse and validate one manual entry line.

    Raises:
        ManualEntryError: If the line is malformed or a value is out of range
    """
    parts = [part.strip() for part in line.split(',')]
    if len(parts) != 6:
        raise ManualEntryError("Expected 6 comma-separated values")

    rsid, chromosome_token, position_text, genotype, confidence_text, method = parts

    chromosome = normalize_chromosome(chromosome_token)
    if chromosome == INVALID_CHROMOSOME:
        raise ManualEntryError(f"Invalid chromosome: {chromosome_token}")

    try:
        position = int(position_text)
    except ValueError:
        raise ManualEntryError("Invalid position number") from None
    if position < 0:
        raise ManualEntryError("Invalid position number")

    genotype = genotype.upper()
    if len(genotype) != 2 or not set(genotype) <= VALID_BASES:
        raise ManualEntryError("Genotype must be 2 letters (A,T,C,G only)")

    try:
        confidence = float(confidence_text)
    except ValueError:
        raise ManualEntryError("Invalid confidence value (0.0-1.0)") from None
    if not 0.0 <= confidence <= 1.0:
        raise ManualEntryError("Confidence must be between 0.0 and 1.0")

    return ManualSnpEntry(rsid, chromosome, position, genotype, confidence, method)


def parse_manual_entries(lines: Iterable[str]) -> List[ManualSnpEntry]:
    """Parse entry lines, skipping blanks and '#' comments."""
    entries = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        try:
            entries.append(parse_manual_entry(line))
        except ManualEntryError as e:
            raise ManualEntryError(f"Line {line_number}: {e}") from e
    return entries


def load_manual_entries(filepath: str) -> List[ManualSnpEntry]:
    with open(filepath, 'r') as f:
        return parse_manual_entries(f)


def write_manual_vcf(output_path: str, sample_name: str,
                     entries: List[ManualSnpEntry]) -> int:
    """
    Export manual entries as a single-sample VCF.

    QUAL is the confidence scaled to 0-100; INFO carries RS, CONF and METHOD.

    Returns:
        Number of data lines written
    """
    if not entries:
        raise ManualEntryError("No SNP entries to export")

    by_site = {(e.chromosome, e.position): e for e in reversed(entries)}
    ordered = sort_snps(snps_to_frame(e.to_record() for e in entries))

    writer = VcfWriter(source=MANUAL_ENTRY_SOURCE)
    extra_meta = [
        '##INFO=<ID=CONF,Number=1,Type=Float,Description="Manual entry confidence">',
        '##INFO=<ID=METHOD,Number=1,Type=String,Description="Manual genotyping method">',
        '##NOTE=DIY home extraction and manual genotyping',
    ]

    with open(output_path, 'w') as f:
        for line in writer.header_lines(sample_name, extra_meta=extra_meta):
            f.write(line + '\n')
        for row in ordered.itertuples(index=False):
            entry = by_site[(row.chromosome, int(row.position))]
            info = f"RS={entry.rsid};CONF={entry.confidence:.2f};METHOD={entry.method}"
            f.write(writer.format_record(entry.rsid, entry.chromosome, entry.position,
                                         entry.genotype, quality=int(entry.confidence * 100),
                                         info=info) + '\n')

    logger.info(f"Exported {len(ordered)} manual SNP entries to VCF")
    return len(ordered)
