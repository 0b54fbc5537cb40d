#!/usr/bin/env python3
"""
Example script demonstrating raw DNA conversion and ancestry estimation.
"""

import tempfile
from pathlib import Path

from dna_ingest import AncestryEstimator, convert, detect_format, load_dataset, parse_vcf

EXAMPLES_DIR = Path(__file__).parent


def example_conversion(output_dir: Path):
    """
    Convert the bundled 23andMe-style file to VCF and read it back.
    """
    print("Example: Raw DNA to VCF")
    print("=" * 60)

    genotype_file = EXAMPLES_DIR / 'sample_genotype.txt'
    output_vcf = output_dir / 'sample.vcf'

    print(f"\n1. Detected format: {detect_format(str(genotype_file)).value}")

    stats = convert(str(genotype_file), str(output_vcf), 'USER')
    print(f"\n2. Converted {stats.valid_snps} of {stats.total_records} records")
    print(stats.format_summary())

    dataset = parse_vcf(output_vcf)
    print(f"\n3. Re-read {len(dataset.variants)} variants for samples {list(dataset.samples)}")


def example_ancestry():
    """
    Estimate ancestry for the USER column of the bundled reference VCF.
    """
    print("\nExample: Ancestry Estimation")
    print("=" * 60)

    dataset = load_dataset(str(EXAMPLES_DIR / 'sample_reference.vcf'),
                           str(EXAMPLES_DIR / 'sample_panel.tsv'))
    estimator = AncestryEstimator(dataset, members_per_population=10)
    scores = estimator.estimate_ancestry('USER')
    print(estimator.generate_report('USER', scores))


def main():
    with tempfile.TemporaryDirectory() as tmp:
        example_conversion(Path(tmp))
    example_ancestry()


if __name__ == '__main__':
    main()
