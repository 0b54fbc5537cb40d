#!/usr/bin/env python3
"""
Command-line interface for raw DNA conversion and ancestry analysis.
"""

import argparse
import logging
import sys
from pathlib import Path

from dna_ingest import (
    AncestryEstimator,
    DnaIngestError,
    allele_frequency,
    convert,
    load_dataset,
)
from dna_ingest.ancestry import DEFAULT_MEMBERS_PER_POPULATION
from dna_ingest.formats import FORMAT_ALIASES
from dna_ingest.manual_entry import DIY_KIT_MARKERS, load_manual_entries, write_manual_vcf

logger = logging.getLogger(__name__)


def run_convert(args) -> int:
    print("=" * 60)
    print("RAW DNA TO VCF CONVERTER")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Output: {args.output}")
    print(f"Sample: {args.sample}")
    print()

    stats = convert(args.input, args.output, args.sample,
                    genotype_format=args.format, strict=args.strict)

    if args.stats:
        print(stats.format_summary())
        print()

    if stats.valid_snps == 0:
        print(f"⚠ No valid SNPs were found in {args.input}")
    print(f"✓ Converted {stats.valid_snps:,} of {stats.total_records:,} records "
          f"({stats.detected_format.value} format)")
    print(f"✓ VCF written to {args.output}")
    return 0


def run_vcf(args) -> int:
    dataset = load_dataset(args.input, args.panel)
    summary = dataset.summary()

    print("VCF Dataset Statistics:")
    print(f"  Total variants: {summary['n_variants']:,}")
    print(f"  Total samples: {summary['n_samples']:,}")
    print(f"  Populations: {summary['n_populations']}")

    print("\nVariants by chromosome:")
    for chromosome, count in summary['variants_per_chromosome'].items():
        print(f"  Chr {chromosome}: {count:,} variants")

    if summary['samples_per_population']:
        print("\nPopulation distribution:")
        for code, count in summary['samples_per_population'].items():
            pop = dataset.populations[code]
            print(f"  {code} ({pop.name}): {count} samples")

    if args.population:
        if args.population not in dataset.populations:
            print(f"✗ Population '{args.population}' not found in panel")
            return 1
        n_variants = min(args.frequencies, len(dataset.variants))
        print(f"\nAllele frequencies in {args.population} (first {n_variants} variants):")
        for index in range(n_variants):
            variant = dataset.variants[index]
            frequency = allele_frequency(dataset, index, args.population)
            value = 'n/a' if frequency is None else f"{frequency:.3f}"
            print(f"  {variant.chromosome}:{variant.position} {variant.id}: {value}")

    return 0


def run_ancestry(args) -> int:
    dataset = load_dataset(args.vcf, args.panel)

    if not dataset.has_sample(args.sample):
        print(f"✗ Sample '{args.sample}' not found in VCF file")
        return 1

    estimator = AncestryEstimator(dataset,
                                  members_per_population=args.members_per_population,
                                  max_workers=args.workers)
    scores = estimator.estimate_ancestry(args.sample)
    report = estimator.generate_report(args.sample, scores)
    print(report)

    if args.output:
        with open(args.output, 'w') as f:
            f.write(report + '\n')
        print(f"\n✓ Report saved to {args.output}")

    if args.plot and scores:
        from dna_ingest.visualization import plot_ancestry_scores
        plot_ancestry_scores(scores, args.plot, sample_id=args.sample)
        print(f"✓ Plot saved to {args.plot}")

    return 0


def run_manual(args) -> int:
    if args.list_markers:
        print("DIY DNA analysis kit markers:")
        for rsid, chromosome, position, description in DIY_KIT_MARKERS:
            print(f"  {rsid} (chr{chromosome}:{position}) - {description}")
        return 0

    if not (args.entries and args.sample and args.output):
        print("✗ --entries, --sample and --output are required unless --list-markers is given")
        return 1

    entries = load_manual_entries(args.entries)
    written = write_manual_vcf(args.output, args.sample, entries)
    average = sum(e.confidence for e in entries) / len(entries)
    print(f"✓ Exported {written} manual SNP entries to {args.output}")
    print(f"  Average confidence: {average * 100:.1f}%")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Convert raw DNA files to VCF and estimate ancestry from VCF data',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a 23andMe / AncestryDNA / MyHeritage export to VCF
  python analyze_ancestry.py convert -i genome.txt -o genome.vcf -s ME --stats

  # Dataset statistics and allele frequencies
  python analyze_ancestry.py vcf -i ALL.chr22.vcf.gz -p integrated.panel --population GBR

  # Ancestry estimate for one sample
  python analyze_ancestry.py ancestry --vcf ALL.chr22.vcf.gz --panel integrated.panel --sample HG00096

  # Manual entries to VCF
  python analyze_ancestry.py manual --entries my_snps.csv -s ME -o diy.vcf
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    convert_parser = subparsers.add_parser('convert', help='Convert a raw DNA file to VCF')
    convert_parser.add_argument('--input', '-i', required=True, help='Raw genotype file')
    convert_parser.add_argument('--output', '-o', required=True, help='Output VCF file')
    convert_parser.add_argument('--sample', '-s', required=True, help='Sample name for the VCF')
    convert_parser.add_argument(
        '--format', '-f',
        default='auto',
        choices=sorted(FORMAT_ALIASES),
        help='Input format (default: auto)'
    )
    convert_parser.add_argument('--stats', action='store_true',
                                help='Show conversion statistics')
    convert_parser.add_argument('--strict', action='store_true',
                                help='Fail if required columns cannot be identified')
    convert_parser.set_defaults(func=run_convert)

    vcf_parser = subparsers.add_parser('vcf', help='Show VCF dataset statistics')
    vcf_parser.add_argument('--input', '-i', required=True, help='VCF file (.vcf or .vcf.gz)')
    vcf_parser.add_argument('--panel', '-p', help='Population panel file')
    vcf_parser.add_argument('--population', help='Population code for allele frequencies')
    vcf_parser.add_argument(
        '--frequencies',
        type=int,
        default=10,
        help='Number of variants to report frequencies for (default: 10)'
    )
    vcf_parser.set_defaults(func=run_vcf)

    ancestry_parser = subparsers.add_parser('ancestry', help='Estimate ancestry for a sample')
    ancestry_parser.add_argument('--vcf', required=True, help='VCF file with sample data')
    ancestry_parser.add_argument('--panel', '-p', required=True, help='Population panel file')
    ancestry_parser.add_argument('--sample', '-s', required=True, help='Sample ID to analyze')
    ancestry_parser.add_argument('--output', '-o', help='Path to save the report')
    ancestry_parser.add_argument('--plot', help='Path to save a PNG bar chart')
    ancestry_parser.add_argument(
        '--members-per-population',
        type=int,
        default=DEFAULT_MEMBERS_PER_POPULATION,
        help=f'Reference samples compared per population '
             f'(default: {DEFAULT_MEMBERS_PER_POPULATION})'
    )
    ancestry_parser.add_argument('--workers', type=int, default=1,
                                 help='Threads for similarity computation (default: 1)')
    ancestry_parser.set_defaults(func=run_ancestry)

    manual_parser = subparsers.add_parser('manual', help='Export manual SNP entries to VCF')
    manual_parser.add_argument('--entries', '-e', help='File of manual entries')
    manual_parser.add_argument('--sample', '-s', help='Sample name for the VCF')
    manual_parser.add_argument('--output', '-o', help='Output VCF file')
    manual_parser.add_argument('--list-markers', action='store_true',
                               help='List the DIY kit markers and exit')
    manual_parser.set_defaults(func=run_manual)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    for attr in ('input', 'vcf', 'entries'):
        path = getattr(args, attr, None)
        if path and not Path(path).exists():
            print(f"Error: File not found: {path}")
            return 1

    try:
        return args.func(args)
    except (DnaIngestError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"\n✗ {args.command} failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
