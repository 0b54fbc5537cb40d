"""
Genotype Codec Module
Converts raw genotype calls into VCF REF/ALT alleles and GT fields.
"""

from typing import List, Tuple

UNKNOWN_ALLELE = 'N'


def encode_genotype(genotype: str) -> Tuple[str, List[str]]:
    """
    Split a genotype call into a reference allele and alternate alleles.

    Accepts the compact two-letter form ('AG') and the separated form
    ('A/G' or 'A|G'). The first allele is treated as the reference.

    Returns:
        Tuple of (reference, alternates). Homozygous calls have no alternates;
        unrecognised shapes encode as ('N', []).
    """
    genotype = (genotype or '').strip().upper()

    if len(genotype) == 2:
        allele1, allele2 = genotype[0], genotype[1]
    elif '/' in genotype or '|' in genotype:
        separator = '/' if '/' in genotype else '|'
        alleles = genotype.split(separator)
        if len(alleles) != 2:
            return UNKNOWN_ALLELE, []
        allele1, allele2 = alleles[0].strip(), alleles[1].strip()
    else:
        return UNKNOWN_ALLELE, []

    if allele1 == allele2:
        return allele1, []
    return allele1, [allele2]


def to_vcf_fields(reference: str, alternates: List[str]) -> Tuple[str, str]:
    """Return the (ALT, GT) column values for an encoded genotype."""
    if not alternates:
        return '.', '0/0'
    return ','.join(alternates), '0/1'
