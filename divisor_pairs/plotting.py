"""
Visualization utilities.

Responsibility: plots only. No logic, no computation.
"""

import matplotlib.pyplot as plt
import pandas as pd
from pathlib import Path
from typing import Optional


def plot_runtime_scaling(df: pd.DataFrame, output_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot elapsed time against K for each algorithm, log-log.

    Parameters
    ----------
    df : pd.DataFrame
        Sweep results from benchmark.run_sweep with columns
        algorithm, K, elapsed_ms, error.
    output_path : Path, optional
        If provided, save figure to this path.

    Returns
    -------
    matplotlib.Figure
    """
    fig, ax = plt.subplots(figsize=(8, 6))

    ok = df[df['error'].isna()]
    for name, group in ok.groupby('algorithm', sort=False):
        group = group.sort_values('K')
        ax.plot(group['K'], group['elapsed_ms'], 'o-', label=name)

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel('K')
    ax.set_ylabel('Elapsed (ms)')
    ax.set_title('Counting n <= K with d(n) = d(n+1)')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig
