"""
DNA Ingest
Converts consumer raw genotype exports to VCF and estimates ancestry against
1000 Genomes style reference panels.
"""

__version__ = "0.2.0"

from .ancestry import AncestryEstimator, allele_frequency, genetic_similarity
from .chromosomes import normalize_chromosome
from .exceptions import (
    DnaIngestError,
    GenotypeFormatError,
    ManualEntryError,
    SampleNotFoundError,
    VcfParseError,
    VcfReadError,
)
from .formats import GenotypeFormat, detect_format
from .genotype_codec import encode_genotype, to_vcf_fields
from .genotype_parser import ConversionStats, GenotypeParser, SnpRecord, parse_genotypes
from .pipeline import analyze_ancestry, convert, load_dataset
from .reference_data import Population, PopulationPanelLoader
from .vcf_parser import Variant, VariantDataset, parse_vcf
from .vcf_writer import VcfWriter

__all__ = [
    'AncestryEstimator',
    'ConversionStats',
    'DnaIngestError',
    'GenotypeFormat',
    'GenotypeFormatError',
    'GenotypeParser',
    'ManualEntryError',
    'Population',
    'PopulationPanelLoader',
    'SampleNotFoundError',
    'SnpRecord',
    'Variant',
    'VariantDataset',
    'VcfParseError',
    'VcfReadError',
    'VcfWriter',
    'allele_frequency',
    'analyze_ancestry',
    'convert',
    'detect_format',
    'encode_genotype',
    'genetic_similarity',
    'load_dataset',
    'normalize_chromosome',
    'parse_genotypes',
    'parse_vcf',
    'to_vcf_fields',
]
