"""
Visualization Module
Plots superpopulation similarity scores.
"""

import logging
from typing import Dict, Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .reference_data import superpopulation_region

logger = logging.getLogger(__name__)

# Color palette for 1000 Genomes superpopulations
SUPERPOPULATION_COLORS = {
    'AFR': '#d62728',
    'AMR': '#9467bd',
    'EAS': '#2ca02c',
    'EUR': '#1f77b4',
    'SAS': '#ff7f0e',
}
DEFAULT_COLOR = '#7f7f7f'


def plot_ancestry_scores(scores: Dict[str, float], output_file: str,
                         sample_id: Optional[str] = None) -> str:
    """
    Save a bar chart of superpopulation similarity scores.

    Args:
        scores: Superpopulation code -> similarity in [0, 1]
        output_file: PNG path to write
        sample_id: Sample name used in the title

    Returns:
        The output path
    """
    ordered = sorted(scores.items(), key=lambda x: x[1], reverse=True)
    labels = [f"{code}\n{superpopulation_region(code)}" for code, _ in ordered]
    values = np.array([score * 100 for _, score in ordered])
    colors = [SUPERPOPULATION_COLORS.get(code, DEFAULT_COLOR) for code, _ in ordered]

    fig, ax = plt.subplots(figsize=(max(6, len(ordered) * 1.5), 5))
    x = np.arange(len(ordered))
    ax.bar(x, values, color=colors)

    for xi, value in zip(x, values):
        ax.text(xi, value + 1, f"{value:.1f}%", ha='center', fontsize=10)

    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylim(0, 105)
    ax.set_ylabel('Genotype similarity (%)', fontsize=12)
    title = 'Superpopulation Similarity'
    if sample_id:
        title = f'{title}: {sample_id}'
    ax.set_title(title, fontsize=14)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Ancestry plot saved: {output_file}")
    return output_file
