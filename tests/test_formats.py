"""Tests for raw genotype format detection."""

import pytest

from dna_ingest.formats import (
    DETECTION_LINE_LIMIT,
    GenotypeFormat,
    detect_format,
    detect_format_from_lines,
    resolve_format,
)
from tests.samples import ANCESTRY_DNA, MY_HERITAGE, TWENTY_THREE_AND_ME


class TestDetectFormat:

    def test_twenty_three_and_me(self, write_file):
        path = write_file('genome.txt', TWENTY_THREE_AND_ME)
        assert detect_format(str(path)) == GenotypeFormat.TWENTY_THREE_AND_ME

    def test_ancestry_dna(self, write_file):
        path = write_file('ancestry.txt', ANCESTRY_DNA)
        assert detect_format(str(path)) == GenotypeFormat.ANCESTRY_DNA

    def test_my_heritage(self, write_file):
        path = write_file('myheritage.csv', MY_HERITAGE)
        assert detect_format(str(path)) == GenotypeFormat.MY_HERITAGE

    def test_ftdna_header_matches_my_heritage_rule_first(self):
        lines = ["RSID,CHROMOSOME,POSITION,RESULT", "rs1,1,100,AG"]
        assert detect_format_from_lines(lines) == GenotypeFormat.MY_HERITAGE

    def test_generic_csv(self):
        lines = ["snp_name,chrom_name,location,call", "rs1,1,100,AG"]
        assert detect_format_from_lines(lines) == GenotypeFormat.CSV

    def test_generic_tab(self):
        lines = ["marker\tchr\tlocation\tcall", "rs1\t1\t100\tAG"]
        assert detect_format_from_lines(lines) == GenotypeFormat.TAB

    def test_unclassifiable_defaults_to_csv(self):
        assert detect_format_from_lines(["marker chr location call"]) == GenotypeFormat.CSV

    def test_comments_and_blank_lines_are_skipped(self):
        lines = ["# comment"] * (DETECTION_LINE_LIMIT + 5) + ["", "rsid\tchromosome\tposition\tgenotype"]
        assert detect_format_from_lines(lines) == GenotypeFormat.TWENTY_THREE_AND_ME

    def test_empty_file_is_undetermined(self, write_file):
        path = write_file('empty.txt', "")
        assert detect_format(str(path)) == GenotypeFormat.UNDETERMINED

    def test_comment_only_file_is_undetermined(self):
        assert detect_format_from_lines(["# a", "#b", "   "]) == GenotypeFormat.UNDETERMINED

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            detect_format(str(tmp_path / 'missing.txt'))


class TestResolveFormat:

    def test_auto_means_detect(self):
        assert resolve_format('auto') is None

    @pytest.mark.parametrize("name,expected", [
        ('23andMe', GenotypeFormat.TWENTY_THREE_AND_ME),
        ('AncestryDNA', GenotypeFormat.ANCESTRY_DNA),
        ('ftdna', GenotypeFormat.FAMILY_TREE_DNA),
        (' tab ', GenotypeFormat.TAB),
    ])
    def test_aliases(self, name, expected):
        assert resolve_format(name) == expected

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            resolve_format('plink')
