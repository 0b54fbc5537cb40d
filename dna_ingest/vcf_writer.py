"""
VCF Writer Module
Serializes parsed SNPs as a single-sample VCF 4.3 file.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Union

import pandas as pd

from .chromosomes import chromosome_sort_key
from .genotype_codec import encode_genotype, to_vcf_fields
from .genotype_parser import SnpRecord, snps_to_frame

logger = logging.getLogger(__name__)

VCF_FILE_FORMAT = 'VCFv4.3'
VCF_SOURCE = 'dna_ingest_RawConverter'
VCF_REFERENCE = 'GRCh37'
VCF_QUALITY = 60

VCF_COLUMNS = ['#CHROM', 'POS', 'ID', 'REF', 'ALT', 'QUAL', 'FILTER', 'INFO', 'FORMAT']


def sort_snps(snps: pd.DataFrame) -> pd.DataFrame:
    """
    Order SNPs into VCF blocks and drop repeated sites.

    Chromosome blocks follow chromosome_sort_key; positions ascend within a
    block. When two records share a chromosome and position the first one
    read is kept.
    """
    if snps.empty:
        return snps
    snps = snps.drop_duplicates(subset=['chromosome', 'position'], keep='first')
    chromosomes = sorted(snps['chromosome'].unique(), key=chromosome_sort_key)
    blocks = [
        snps[snps['chromosome'] == chromosome].sort_values('position', kind='stable')
        for chromosome in chromosomes
    ]
    return pd.concat(blocks).reset_index(drop=True)


class VcfWriter:
    """
    Writes SNP calls for one sample to VCF.
    """

    def __init__(self, source: str = VCF_SOURCE, reference: str = VCF_REFERENCE,
                 quality: int = VCF_QUALITY):
        self.source = source
        self.reference = reference
        self.quality = quality

    def header_lines(self, sample_name: str, extra_meta: Optional[List[str]] = None,
                     file_date: Optional[date] = None) -> List[str]:
        """Build the meta-information block and the column header line."""
        file_date = file_date or date.today()
        lines = [
            f"##fileformat={VCF_FILE_FORMAT}",
            f"##fileDate={file_date.strftime('%Y%m%d')}",
            f"##source={self.source}",
            f"##reference={self.reference}",
            '##INFO=<ID=RS,Number=1,Type=String,Description="dbSNP RS identifier">',
        ]
        lines.extend(extra_meta or [])
        lines.append('##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">')
        lines.append('\t'.join(VCF_COLUMNS + [sample_name]))
        return lines

    def format_record(self, rsid: str, chromosome: str, position: int, genotype: str,
                      quality=None, info: Optional[str] = None) -> str:
        """Render one SNP as a VCF data line."""
        reference, alternates = encode_genotype(genotype)
        alt, gt = to_vcf_fields(reference, alternates)
        if info is None:
            info = f"RS={rsid}" if rsid else '.'
        return '\t'.join([
            chromosome,
            str(position),
            rsid or '.',
            reference,
            alt,
            str(self.quality if quality is None else quality),
            'PASS',
            info,
            'GT',
            gt,
        ])

    def write(self, output_path: str, sample_name: str,
              records: Union[pd.DataFrame, Iterable[SnpRecord]]) -> int:
        """
        Write SNPs to a VCF file.

        Args:
            output_path: Destination path
            sample_name: Name for the single sample column
            records: DataFrame with rsid/chromosome/position/genotype columns,
                or an iterable of SnpRecord

        Returns:
            Number of data lines written
        """
        snps = records if isinstance(records, pd.DataFrame) else snps_to_frame(records)
        snps = sort_snps(snps)

        logger.info(f"Writing VCF: {output_path}")
        with open(output_path, 'w') as f:
            for line in self.header_lines(sample_name):
                f.write(line + '\n')
            for row in snps.itertuples(index=False):
                f.write(self.format_record(row.rsid, row.chromosome, int(row.position),
                                           row.genotype) + '\n')

        logger.info(f"Wrote {len(snps):,} variants for sample {sample_name}")
        return len(snps)
