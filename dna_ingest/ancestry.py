"""
Ancestry Estimation Module
Scores how similar a sample is to each reference superpopulation.

This is a genotype-matching heuristic, not a population-genetics model:
similarity between two samples is the fraction of variants at which their
genotype strings are identical.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from scipy.spatial.distance import hamming

from .reference_data import superpopulation_region
from .vcf_parser import VariantDataset

logger = logging.getLogger(__name__)

DEFAULT_MEMBERS_PER_POPULATION = 10


def genetic_similarity(dataset: VariantDataset, sample_a: str, sample_b: str) -> float:
    """
    Fraction of comparable variants where two samples have the same genotype.

    A variant is comparable when both samples' columns exist on that line.
    Returns 0.0 when nothing is comparable.

    Raises:
        SampleNotFoundError: If either sample is not in the dataset
    """
    index_a = dataset.sample_index(sample_a)
    index_b = dataset.sample_index(sample_b)

    lengths = dataset.genotype_lengths
    comparable = (lengths > index_a) & (lengths > index_b)
    if not comparable.any():
        return 0.0

    genotypes_a = dataset.sample_genotypes(index_a)[comparable]
    genotypes_b = dataset.sample_genotypes(index_b)[comparable]
    return float(1.0 - hamming(genotypes_a, genotypes_b))


def allele_frequency(dataset: VariantDataset, variant_index: int,
                     population_code: str) -> Optional[float]:
    """
    Non-reference allele frequency of one variant within a population.

    Only members present in the VCF with a numeric diploid genotype
    ('0/1', '1|1', ...) are counted.

    Returns:
        Frequency in [0, 1], or None if the variant or population is unknown
        or no alleles could be counted
    """
    if not 0 <= variant_index < len(dataset.variants):
        return None
    population = dataset.populations.get(population_code)
    if population is None:
        return None

    variant = dataset.variants[variant_index]
    alt_alleles = 0
    total_alleles = 0

    for member in population.members:
        if not dataset.has_sample(member):
            continue
        index = dataset.sample_index(member)
        if index >= len(variant.genotypes):
            continue
        alleles = parse_numeric_genotype(variant.genotypes[index])
        if alleles is None:
            continue
        total_alleles += 2
        alt_alleles += sum(1 for allele in alleles if allele != 0)

    if total_alleles == 0:
        return None
    return alt_alleles / total_alleles


def parse_numeric_genotype(genotype: str) -> Optional[Tuple[int, int]]:
    """Parse '0|1' / '0/1' style genotypes; anything else returns None."""
    genotype = genotype.split(':', 1)[0]
    separator = '|' if '|' in genotype else '/'
    parts = genotype.split(separator)
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    return int(parts[0]), int(parts[1])


class AncestryEstimator:
    """
    Estimates superpopulation similarity scores for a sample against the
    reference populations attached to a dataset.
    """

    def __init__(self, dataset: VariantDataset,
                 members_per_population: Optional[int] = DEFAULT_MEMBERS_PER_POPULATION,
                 max_workers: int = 1):
        """
        Initialize ancestry estimator.

        Args:
            dataset: Loaded VCF with populations attached
            members_per_population: Reference samples compared per population
                (None compares every member)
            max_workers: Threads used for similarity computation
        """
        if members_per_population is not None and members_per_population < 1:
            raise ValueError("members_per_population must be at least 1")
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.dataset = dataset
        self.members_per_population = members_per_population
        self.max_workers = max_workers

    def similarity(self, sample_a: str, sample_b: str) -> float:
        return genetic_similarity(self.dataset, sample_a, sample_b)

    def reference_members(self) -> List[Tuple[str, str]]:
        """
        (superpopulation, sample) pairs used as references, in a fixed order:
        superpopulations sorted, then population codes sorted, then panel order.
        Members missing from the VCF are left out.
        """
        populations = self.dataset.populations
        pairs = []
        for super_pop in sorted({pop.ancestry for pop in populations.values()}):
            for code in sorted(populations):
                population = populations[code]
                if population.ancestry != super_pop:
                    continue
                for member in population.members[:self.members_per_population]:
                    if self.dataset.has_sample(member):
                        pairs.append((super_pop, member))
                    else:
                        logger.debug(f"Panel sample {member} ({code}) not in VCF; skipped")
        return pairs

    def estimate_ancestry(self, sample_id: str) -> Dict[str, float]:
        """
        Average similarity of a sample to each superpopulation's reference members.

        Superpopulations with no comparable members are omitted.

        Raises:
            SampleNotFoundError: If sample_id is not in the dataset
        """
        self.dataset.sample_index(sample_id)
        pairs = self.reference_members()

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                similarities = list(executor.map(
                    lambda pair: self.similarity(sample_id, pair[1]), pairs
                ))
        else:
            similarities = [self.similarity(sample_id, member) for _, member in pairs]

        totals: Dict[str, List[float]] = {}
        for (super_pop, _), value in zip(pairs, similarities):
            totals.setdefault(super_pop, []).append(value)

        return {super_pop: sum(values) / len(values) for super_pop, values in totals.items()}

    def get_top_matches(self, scores: Dict[str, float], n: int = 5) -> List[Tuple[str, float]]:
        """Top N superpopulations by score."""
        return sorted(scores.items(), key=lambda x: x[1], reverse=True)[:n]

    def generate_report(self, sample_id: str, scores: Dict[str, float]) -> str:
        """
        Generate a human-readable ancestry report.

        Args:
            sample_id: Sample the scores belong to
            scores: Superpopulation -> similarity in [0, 1]

        Returns:
            Formatted report string
        """
        report_lines = []
        report_lines.append("=" * 60)
        report_lines.append(f"ANCESTRY ESTIMATES FOR {sample_id}")
        report_lines.append("=" * 60)
        report_lines.append("")
        report_lines.append("NOTE: Scores are genotype-match similarities to reference")
        report_lines.append("samples, not admixture proportions.")
        report_lines.append("")

        if not scores:
            report_lines.append("No reference samples could be compared.")
        else:
            summary = self.dataset.summary()
            report_lines.append(f"Variants compared: {summary['n_variants']:,}")
            report_lines.append(f"Reference populations: {summary['n_populations']}")
            report_lines.append("")
            report_lines.append("SUPERPOPULATION SIMILARITY:")
            report_lines.append("-" * 60)
            for super_pop, score in self.get_top_matches(scores, n=len(scores)):
                percentage = score * 100
                bar = '█' * int(round(percentage / 5))
                region = superpopulation_region(super_pop)
                report_lines.append(f"{super_pop:>6s} {region:12s}: {percentage:5.1f}% |{bar}")

        report_lines.append("")
        report_lines.append("=" * 60)
        return "\n".join(report_lines)

