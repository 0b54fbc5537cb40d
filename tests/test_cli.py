"""Tests for the analyze_ancestry command line."""

import pytest

from analyze_ancestry import build_parser, main
from tests.samples import TWENTY_THREE_AND_ME


class TestConvertCommand:

    def test_convert_with_stats(self, write_file, tmp_path, capsys):
        source = write_file('genome.txt', TWENTY_THREE_AND_ME)
        output = tmp_path / 'genome.vcf'

        assert main(['convert', '-i', str(source), '-o', str(output), '-s', 'ME', '--stats']) == 0

        out = capsys.readouterr().out
        assert "Valid SNPs: 4" in out
        assert "✓ VCF written to" in out
        assert output.exists()

    def test_missing_input(self, tmp_path, capsys):
        code = main(['convert', '-i', str(tmp_path / 'nope.txt'), '-o', str(tmp_path / 'o.vcf'),
                     '-s', 'ME'])
        assert code == 1
        assert "Error: File not found" in capsys.readouterr().out

    def test_strict_failure(self, write_file, tmp_path, capsys):
        source = write_file('odd.csv', "foo,bar,baz,qux\n1,2,3,4\n")
        code = main(['convert', '-i', str(source), '-o', str(tmp_path / 'o.vcf'), '-s', 'ME',
                     '--strict'])
        assert code == 1
        assert "✗ convert failed" in capsys.readouterr().out

    def test_format_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['convert', '-i', 'a', '-o', 'b', '-s', 'c', '-f', 'plink'])


class TestVcfCommand:

    def test_statistics_and_frequencies(self, reference_vcf, panel_file, capsys):
        code = main(['vcf', '-i', str(reference_vcf), '-p', str(panel_file),
                     '--population', 'YRI', '--frequencies', '5'])

        assert code == 0
        out = capsys.readouterr().out
        assert "Total variants: 5" in out
        assert "YRI (Yoruba in Ibadan, Nigeria): 2 samples" in out
        assert "1:100 rs1: 1.000" in out
        assert "X:500 rs5: n/a" in out

    def test_unknown_population(self, reference_vcf, panel_file, capsys):
        code = main(['vcf', '-i', str(reference_vcf), '-p', str(panel_file),
                     '--population', 'XYZ'])
        assert code == 1
        assert "Population 'XYZ' not found" in capsys.readouterr().out


class TestAncestryCommand:

    def test_report_output_and_plot(self, reference_vcf, panel_file, tmp_path, capsys):
        report = tmp_path / 'report.txt'
        plot = tmp_path / 'plot.png'

        code = main(['ancestry', '--vcf', str(reference_vcf), '-p', str(panel_file),
                     '-s', 'USER', '-o', str(report), '--plot', str(plot), '--workers', '2'])

        assert code == 0
        assert "ANCESTRY ESTIMATES FOR USER" in capsys.readouterr().out
        assert "75.0%" in report.read_text()
        assert plot.exists()

    def test_unknown_sample(self, reference_vcf, panel_file, capsys):
        code = main(['ancestry', '--vcf', str(reference_vcf), '-p', str(panel_file),
                     '-s', 'NOPE'])
        assert code == 1
        assert "✗ Sample 'NOPE' not found in VCF file" in capsys.readouterr().out


class TestManualCommand:

    def test_list_markers(self, capsys):
        assert main(['manual', '--list-markers']) == 0
        assert "rs12913832 (chr15:28365618)" in capsys.readouterr().out

    def test_export(self, write_file, tmp_path, capsys):
        entries = write_file('entries.csv', "rs1,1,100,AG,0.8,phenotype\n")
        output = tmp_path / 'manual.vcf'

        assert main(['manual', '-e', str(entries), '-s', 'ME', '-o', str(output)]) == 0
        out = capsys.readouterr().out
        assert "Exported 1 manual SNP entries" in out
        assert "Average confidence: 80.0%" in out

    def test_invalid_entry(self, write_file, tmp_path, capsys):
        entries = write_file('entries.csv', "rs1,1,100,AG,2.0,phenotype\n")
        code = main(['manual', '-e', str(entries), '-s', 'ME', '-o', str(tmp_path / 'm.vcf')])
        assert code == 1
        assert "Line 1: Confidence must be between" in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        assert main(['manual']) == 1
