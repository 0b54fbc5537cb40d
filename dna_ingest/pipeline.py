"""
Pipeline entry points: raw genotype file -> VCF, and VCF + panel -> ancestry scores.
"""

import logging
from typing import Dict, Optional, Union

from .ancestry import DEFAULT_MEMBERS_PER_POPULATION, AncestryEstimator
from .exceptions import GenotypeFormatError
from .formats import GenotypeFormat, detect_format, resolve_format
from .genotype_parser import ConversionStats, parse_genotype_file
from .reference_data import load_population_panel
from .vcf_parser import VariantDataset, parse_vcf
from .vcf_writer import VcfWriter

logger = logging.getLogger(__name__)


def convert(input_path: str, output_path: str, sample_name: str,
            genotype_format: Union[GenotypeFormat, str, None] = None,
            strict: bool = False) -> ConversionStats:
    """
    Convert a raw genotype file to a single-sample VCF.

    Args:
        input_path: Raw genotype export
        output_path: VCF file to write
        sample_name: Sample column name in the VCF
        genotype_format: Input layout; None or 'auto' detects it from the header
        strict: Raise GenotypeFormatError instead of writing an empty VCF when
            the generic parser cannot find its columns

    Returns:
        ConversionStats for the input file
    """
    if isinstance(genotype_format, str):
        genotype_format = resolve_format(genotype_format)
    if genotype_format is None:
        genotype_format = detect_format(input_path)

    logger.info(f"Converting {input_path} ({genotype_format.value}) -> {output_path}")
    parsed = parse_genotype_file(input_path, genotype_format)

    if not parsed.columns_resolved:
        message = (f"Could not identify columns {', '.join(parsed.missing_columns)} "
                   f"in {input_path}; try an explicit format")
        if strict:
            raise GenotypeFormatError(message, parsed.missing_columns)
        logger.warning(message)

    VcfWriter().write(output_path, sample_name, parsed.snps)
    return ConversionStats.from_parsed(genotype_format, sample_name, parsed)


def load_dataset(vcf_path: str, panel_path: Optional[str] = None) -> VariantDataset:
    """Parse a VCF and, if given, attach the populations from a panel file."""
    dataset = parse_vcf(vcf_path)
    if panel_path:
        dataset = dataset.with_populations(load_population_panel(panel_path))
    return dataset


def analyze_ancestry(vcf_path: str, panel_path: str, sample_id: str,
                     members_per_population: Optional[int] = DEFAULT_MEMBERS_PER_POPULATION,
                     max_workers: int = 1) -> Dict[str, float]:
    """
    Estimate superpopulation similarity scores for one sample.

    Raises:
        SampleNotFoundError: If sample_id is not a sample column of the VCF
    """
    dataset = load_dataset(vcf_path, panel_path)
    dataset.sample_index(sample_id)
    estimator = AncestryEstimator(dataset, members_per_population=members_per_population,
                                  max_workers=max_workers)
    return estimator.estimate_ancestry(sample_id)
