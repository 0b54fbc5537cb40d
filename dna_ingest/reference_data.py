"""
Reference Data Module
Loads 1000 Genomes style population panels that map reference samples to
populations and superpopulations.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

# 1000 Genomes population codes and their descriptions
POPULATION_NAMES = MappingProxyType({
    'CHB': 'Han Chinese in Beijing',
    'JPT': 'Japanese in Tokyo',
    'CHS': 'Southern Han Chinese',
    'CDX': 'Chinese Dai in Xishuangbanna',
    'KHV': 'Kinh in Ho Chi Minh City',
    'CEU': 'Utah residents with European ancestry',
    'TSI': 'Toscani in Italia',
    'FIN': 'Finnish in Finland',
    'GBR': 'British in England and Scotland',
    'IBS': 'Iberian populations in Spain',
    'YRI': 'Yoruba in Ibadan, Nigeria',
    'LWK': 'Luhya in Webuye, Kenya',
    'GWD': 'Gambian in Western Division',
    'MSL': 'Mende in Sierra Leone',
    'ESN': 'Esan in Nigeria',
    'ASW': 'African Ancestry in Southwest US',
    'ACB': 'African Caribbean in Barbados',
    'MXL': 'Mexican Ancestry in Los Angeles',
    'PUR': 'Puerto Rican in Puerto Rico',
    'CLM': 'Colombian in Medellin',
    'PEL': 'Peruvian in Lima',
})

SUPERPOPULATION_REGIONS = MappingProxyType({
    'EAS': 'East Asia',
    'EUR': 'Europe',
    'AFR': 'Africa',
    'AMR': 'Americas',
    'SAS': 'South Asia',
})

UNKNOWN_REGION = 'Unknown'
PANEL_HEADER_TOKEN = 'sample'
MIN_PANEL_FIELDS = 4


def population_name(code: str) -> str:
    """Display name for a population code; unknown codes pass through."""
    return POPULATION_NAMES.get(code, code)


def superpopulation_region(superpopulation: str) -> str:
    return SUPERPOPULATION_REGIONS.get(superpopulation, UNKNOWN_REGION)


@dataclass
class Population:
    """A reference population and the panel samples that belong to it."""

    code: str
    name: str
    ancestry: str
    region: str
    members: List[str] = field(default_factory=list)


class PopulationPanelLoader:
    """
    Reads a tab-separated panel file with columns
    sample, population, superpopulation, gender.
    """

    def __init__(self):
        self.populations: Dict[str, Population] = OrderedDict()

    def load(self, filepath: str) -> Dict[str, Population]:
        """
        Load populations from a panel file.

        Rows whose first column is 'sample' are headers, and rows missing any
        of the four columns are skipped.

        Args:
            filepath: Path to the panel file

        Returns:
            Dictionary mapping population code to Population
        """
        logger.info(f"Loading population data: {filepath}")
        self.populations = OrderedDict()

        try:
            panel = pd.read_csv(
                filepath,
                sep='\t',
                header=None,
                dtype=str,
                usecols=range(MIN_PANEL_FIELDS),
                keep_default_na=False,
                na_values=[''],
                encoding='utf-8',
                encoding_errors='replace',
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"Population panel is empty: {filepath}")
            return self.populations

        panel = panel.dropna()
        panel = panel[panel[0] != PANEL_HEADER_TOKEN]

        # Gender (fourth column) is read but not used.
        for sample, pop_code, super_pop, _gender in panel.itertuples(index=False):
            self.add_member(sample, pop_code, super_pop)

        for code, pop in self.populations.items():
            logger.info(f"  {pop.name} ({pop.ancestry}): {len(pop.members)} samples")

        return self.populations

    def add_member(self, sample: str, pop_code: str, super_pop: str):
        """Append a sample to its population, creating the population on first sight."""
        if pop_code not in self.populations:
            self.populations[pop_code] = Population(
                code=pop_code,
                name=population_name(pop_code),
                ancestry=super_pop,
                region=superpopulation_region(super_pop),
            )
        self.populations[pop_code].members.append(sample)

    def get_reference_stats(self) -> Dict:
        """Get statistics about the loaded panel."""
        if not self.populations:
            return {}

        superpops = sorted({pop.ancestry for pop in self.populations.values()})
        return {
            'n_samples': sum(len(pop.members) for pop in self.populations.values()),
            'n_populations': len(self.populations),
            'superpopulations': superpops,
            'populations': {code: len(pop.members) for code, pop in self.populations.items()},
        }


def load_population_panel(filepath: str) -> Dict[str, Population]:
    """Load a panel file into a population-code -> Population mapping."""
    return PopulationPanelLoader().load(filepath)
