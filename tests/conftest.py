"""Pytest fixtures for dna_ingest tests."""

import pytest

from tests.samples import PANEL, REFERENCE_VCF


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def reference_vcf(write_file):
    return write_file('reference.vcf', REFERENCE_VCF)


@pytest.fixture
def panel_file(write_file):
    return write_file('panel.tsv', PANEL)


@pytest.fixture
def reference_dataset(reference_vcf, panel_file):
    from dna_ingest import load_dataset

    return load_dataset(str(reference_vcf), str(panel_file))
