"""Tests for genotype to VCF allele conversion."""

import pytest

from dna_ingest.genotype_codec import encode_genotype, to_vcf_fields


class TestEncodeGenotype:

    @pytest.mark.parametrize("genotype,expected", [
        ("GG", ("G", [])),
        ("AG", ("A", ["G"])),
        ("ag", ("A", ["G"])),
        ("A/T", ("A", ["T"])),
        ("A|G", ("A", ["G"])),
        ("T/T", ("T", [])),
        (" C|C ", ("C", [])),
    ])
    def test_supported_shapes(self, genotype, expected):
        assert encode_genotype(genotype) == expected

    @pytest.mark.parametrize("genotype", ["XYZ", "A", "", "A/G/T", "A|G|C"])
    def test_unrecognised_shapes_encode_as_unknown_reference(self, genotype):
        # These are still written to the VCF with REF 'N' rather than dropped.
        assert encode_genotype(genotype) == ("N", [])


class TestToVcfFields:

    def test_homozygous(self):
        assert to_vcf_fields("G", []) == (".", "0/0")

    def test_heterozygous(self):
        assert to_vcf_fields("A", ["G"]) == ("G", "0/1")

    def test_multiple_alternates_are_comma_joined(self):
        assert to_vcf_fields("A", ["G", "T"]) == ("G,T", "0/1")
