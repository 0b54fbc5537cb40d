"""
Chromosome Normalization Module
Maps the many chromosome spellings used by genotyping vendors onto canonical tokens.
"""

import re
from typing import Tuple

# Sentinel for anything that is not a canonical chromosome; callers drop these records.
INVALID_CHROMOSOME = '0'

CANONICAL_CHROMOSOMES = frozenset([str(i) for i in range(1, 23)] + ['X', 'Y', 'MT'])

_ALIASES = {
    'x': 'X', 'chrx': 'X', '23': 'X',
    'y': 'Y', 'chry': 'Y', '24': 'Y',
    'm': 'MT', 'mt': 'MT', 'chrm': 'MT', 'chrmt': 'MT', '25': 'MT',
}

_NON_DIGITS = re.compile(r'\D')


def normalize_chromosome(token: str) -> str:
    """
    Convert a chromosome token to its canonical form.

    Args:
        token: Raw chromosome value, e.g. 'chr1', '23', 'chrMT'

    Returns:
        One of '1'..'22', 'X', 'Y', 'MT', or '0' when the token is not a
        recognised chromosome.
    """
    if token is None:
        return INVALID_CHROMOSOME

    token = str(token).strip()
    alias = _ALIASES.get(token.lower())
    if alias is not None:
        return alias

    digits = _NON_DIGITS.sub('', token)
    if not digits:
        return INVALID_CHROMOSOME

    number = int(digits)
    if 1 <= number <= 22:
        return str(number)
    return INVALID_CHROMOSOME


def chromosome_sort_key(chromosome: str) -> Tuple[int, int, str]:
    """
    Sort key used when writing VCF blocks.

    Numeric chromosomes sort numerically and come first; anything else
    (X, Y, MT) sorts lexically after them.
    """
    if chromosome.isdigit():
        return (0, int(chromosome), '')
    return (1, 0, chromosome)
