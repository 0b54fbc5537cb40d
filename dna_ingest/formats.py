"""
Format Detection Module
Identifies which vendor produced a raw genotype file by sniffing its header.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Number of non-comment lines read while sniffing a file.
DETECTION_LINE_LIMIT = 10


class GenotypeFormat(Enum):
    """Raw genotype file layouts understood by the parser."""

    TWENTY_THREE_AND_ME = '23andme'
    ANCESTRY_DNA = 'ancestry'
    MY_HERITAGE = 'myheritage'
    FAMILY_TREE_DNA = 'familytree'
    CSV = 'csv'
    TAB = 'tab'
    UNDETERMINED = 'undetermined'


FORMAT_ALIASES = {
    'auto': None,
    '23andme': GenotypeFormat.TWENTY_THREE_AND_ME,
    'ancestry': GenotypeFormat.ANCESTRY_DNA,
    'ancestrydna': GenotypeFormat.ANCESTRY_DNA,
    'myheritage': GenotypeFormat.MY_HERITAGE,
    'familytree': GenotypeFormat.FAMILY_TREE_DNA,
    'familytreedna': GenotypeFormat.FAMILY_TREE_DNA,
    'ftdna': GenotypeFormat.FAMILY_TREE_DNA,
    'csv': GenotypeFormat.CSV,
    'tab': GenotypeFormat.TAB,
}


def resolve_format(name: str) -> Optional[GenotypeFormat]:
    """
    Resolve a user-supplied format name.

    Returns:
        The matching GenotypeFormat, or None for 'auto'.

    Raises:
        ValueError: If the name is not a known format.
    """
    key = name.strip().lower()
    if key not in FORMAT_ALIASES:
        choices = ', '.join(sorted(FORMAT_ALIASES))
        raise ValueError(f"Unsupported format: {name} (choose from {choices})")
    return FORMAT_ALIASES[key]


def detect_format_from_lines(lines: Iterable[str]) -> GenotypeFormat:
    """
    Classify a genotype file from its lines.

    Only the first non-blank, non-comment line is inspected, and at most
    DETECTION_LINE_LIMIT such lines are consumed from the iterable.
    """
    candidates = []
    for line in lines:
        stripped = line.rstrip('\r\n')
        if not stripped.strip() or stripped.startswith('#'):
            continue
        candidates.append(stripped)
        if len(candidates) >= DETECTION_LINE_LIMIT:
            break

    if not candidates:
        logger.warning("No header line found; format is undetermined")
        return GenotypeFormat.UNDETERMINED

    first_line = candidates[0]
    header = first_line.lower()

    def has(*words):
        return all(word in header for word in words)

    if has('rsid', 'chromosome', 'position', 'genotype'):
        detected = GenotypeFormat.TWENTY_THREE_AND_ME
    elif has('rsid', 'chrom', 'pos', 'allele1'):
        detected = GenotypeFormat.ANCESTRY_DNA
    elif has('rsid', 'chr', 'pos') and ('result' in header or 'genotype' in header):
        detected = GenotypeFormat.MY_HERITAGE
    elif has('rsid', 'chromosome', 'position', 'result'):
        # Shadowed by the MyHeritage rule for every header it matches.
        detected = GenotypeFormat.FAMILY_TREE_DNA
    else:
        comma_count = first_line.count(',')
        tab_count = first_line.count('\t')
        if comma_count > tab_count and comma_count > 2:
            detected = GenotypeFormat.CSV
        elif tab_count > 2:
            detected = GenotypeFormat.TAB
        else:
            logger.warning("Could not auto-detect format, defaulting to generic CSV")
            detected = GenotypeFormat.CSV

    logger.info(f"Detected {detected.value} format")
    return detected


def detect_format(path: str) -> GenotypeFormat:
    """Sniff the header of a genotype file on disk."""
    logger.info(f"Auto-detecting file format for: {path}")
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return detect_format_from_lines(f)
