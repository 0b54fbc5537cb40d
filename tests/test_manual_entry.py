"""Tests for manual SNP entry export."""

import pytest

from dna_ingest.exceptions import ManualEntryError
from dna_ingest.manual_entry import (
    DIY_KIT_MARKERS,
    ManualSnpEntry,
    load_manual_entries,
    parse_manual_entries,
    parse_manual_entry,
    write_manual_vcf,
)
from dna_ingest.vcf_parser import parse_vcf


class TestParseManualEntry:

    def test_valid_line(self):
        entry = parse_manual_entry("rs12913832, chr15, 28365618, ag, 0.8, phenotype")
        assert entry == ManualSnpEntry('rs12913832', '15', 28365618, 'AG', 0.8, 'phenotype')

    @pytest.mark.parametrize("line,message", [
        ("rs1,1,100,AG,0.8", "Expected 6"),
        ("rs1,chrUn,100,AG,0.8,x", "Invalid chromosome"),
        ("rs1,1,abc,AG,0.8,x", "Invalid position"),
        ("rs1,1,-5,AG,0.8,x", "Invalid position"),
        ("rs1,1,100,AGT,0.8,x", "Genotype must be 2 letters"),
        ("rs1,1,100,AN,0.8,x", "Genotype must be 2 letters"),
        ("rs1,1,100,AG,high,x", "Invalid confidence"),
        ("rs1,1,100,AG,1.5,x", "Confidence must be between"),
    ])
    def test_invalid_lines(self, line, message):
        with pytest.raises(ManualEntryError, match=message):
            parse_manual_entry(line)

    def test_errors_carry_line_numbers(self):
        lines = ["# header", "rs1,1,100,AG,0.8,x", "rs2,1,200,ZZ,0.8,x"]
        with pytest.raises(ManualEntryError, match="^Line 3: "):
            parse_manual_entries(lines)

    def test_blank_and_comment_lines_are_skipped(self, write_file):
        path = write_file('entries.csv', "# rsid,...\n\nrs1,1,100,AG,0.5,x\n")
        assert [e.rsid for e in load_manual_entries(str(path))] == ['rs1']


class TestWriteManualVcf:

    def test_quality_and_info_come_from_the_entry(self, tmp_path):
        output = tmp_path / 'manual.vcf'
        entries = [ManualSnpEntry('rs1', '1', 100, 'AG', 0.8, 'phenotype')]

        assert write_manual_vcf(str(output), 'ME', entries) == 1
        lines = output.read_text().splitlines()
        assert '##source=dna_ingest_ManualEntry' in lines
        assert any(line.startswith('##INFO=<ID=CONF,') for line in lines)
        assert any(line.startswith('##NOTE=') for line in lines)
        assert lines[-1] == '1\t100\trs1\tA\tG\t80\tPASS\tRS=rs1;CONF=0.80;METHOD=phenotype\tGT\t0/1'

    def test_entries_are_sorted_and_deduplicated(self, tmp_path):
        output = tmp_path / 'manual.vcf'
        entries = [
            ManualSnpEntry('rsX', 'X', 10, 'CC', 0.5, 'a'),
            ManualSnpEntry('rs2', '2', 20, 'GG', 0.5, 'a'),
            ManualSnpEntry('rs2dup', '2', 20, 'TT', 0.9, 'b'),
            ManualSnpEntry('rs1', '1', 30, 'AT', 0.5, 'a'),
        ]

        assert write_manual_vcf(str(output), 'ME', entries) == 3
        dataset = parse_vcf(output)
        assert [v.id for v in dataset.variants] == ['rs1', 'rs2', 'rsX']
        assert dataset.variants[1].quality == 50.0

    def test_no_entries_raises(self, tmp_path):
        with pytest.raises(ManualEntryError):
            write_manual_vcf(str(tmp_path / 'manual.vcf'), 'ME', [])


def test_diy_kit_markers_are_valid_entries():
    for rsid, chromosome, position, _ in DIY_KIT_MARKERS:
        entry = parse_manual_entry(f"{rsid},{chromosome},{position},AA,1.0,kit")
        assert entry.chromosome == chromosome
