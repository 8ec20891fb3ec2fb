"""
Plotting utilities for the sushi strategy experiments.

All plots are saved as PNG files (dpi=200) in non-interactive mode.
"""

import os
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np


def ensure_dir(path):
    """Ensure directory exists, create if it doesn't."""
    os.makedirs(path, exist_ok=True)


def save_bar_plot(labels, values, title, outfile, ylabel="Value", color=None, errors=None):
    """
    Save a bar chart.

    Args:
        labels: X-axis labels (one per player)
        values: Y-axis values
        title: Plot title
        outfile: Output file path
        ylabel: Y-axis label
        color: Bar color (optional)
        errors: Optional symmetric error bar half-widths
    """
    plt.figure(figsize=(max(8, len(labels) * 1.6), 6))
    bars = plt.bar(labels, values, color=color, alpha=0.7, edgecolor='black', linewidth=1.5,
                   yerr=errors, capsize=6 if errors is not None else 0)

    for bar in bars:
        height = bar.get_height()
        plt.text(bar.get_x() + bar.get_width()/2., height,
                f'{height:.2f}',
                ha='center', va='bottom', fontsize=10)

    plt.xlabel('Player', fontsize=12)
    plt.ylabel(ylabel, fontsize=12)
    plt.title(title, fontsize=14, fontweight='bold')
    plt.xticks(rotation=15, ha='right')
    plt.grid(True, alpha=0.3, axis='y')
    plt.tight_layout()
    plt.savefig(outfile, dpi=200, bbox_inches='tight')
    plt.close()


def save_line_plot(x, y, title, xlabel, ylabel, outfile, lower=None, upper=None, y2=None,
                   label1=None, label2=None):
    """
    Save a line plot, optionally with a shaded confidence band around y.

    Args:
        x: X-axis values
        y: Y-axis values
        title: Plot title
        xlabel: X-axis label
        ylabel: Y-axis label
        outfile: Output file path
        lower: Optional lower bound of the band around y
        upper: Optional upper bound of the band around y
        y2: Optional second series
        label1: Label for y
        label2: Label for y2
    """
    plt.figure(figsize=(8, 6))
    plt.plot(x, y, marker='o', linewidth=2, markersize=6, label=label1 or ylabel, color='#1f77b4')
    if lower is not None and upper is not None:
        plt.fill_between(x, lower, upper, alpha=0.2, color='#1f77b4')
    if y2 is not None:
        plt.plot(x, y2, marker='s', linewidth=2, markersize=6, label=label2 or 'Line 2', color='#ff7f0e')

    plt.xlabel(xlabel, fontsize=12)
    plt.ylabel(ylabel, fontsize=12)
    plt.title(title, fontsize=14, fontweight='bold')
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()
    plt.savefig(outfile, dpi=200, bbox_inches='tight')
    plt.close()


def save_position_plot(labels, positions, title, outfile):
    """
    Save a stacked bar chart of finishing positions.

    Args:
        labels: One label per player
        positions: players x ranks count matrix (row = player, column = rank)
        title: Plot title
        outfile: Output file path
    """
    positions = np.asarray(positions)
    if positions.size == 0 or positions.sum() == 0:
        print(f"Warning: No position data for plot: {title}")
        return

    plt.figure(figsize=(max(8, len(labels) * 1.6), 6))
    colors = plt.cm.viridis(np.linspace(0, 1, positions.shape[1]))
    bottom = np.zeros(positions.shape[0])
    for rank in range(positions.shape[1]):
        plt.bar(labels, positions[:, rank], bottom=bottom, color=colors[rank],
                edgecolor='black', linewidth=1, label=f'#{rank + 1}')
        bottom += positions[:, rank]

    plt.xlabel('Player', fontsize=12)
    plt.ylabel('Games', fontsize=12)
    plt.title(title, fontsize=14, fontweight='bold')
    plt.xticks(rotation=15, ha='right')
    plt.legend(title='Position')
    plt.grid(True, alpha=0.3, axis='y')
    plt.tight_layout()
    plt.savefig(outfile, dpi=200, bbox_inches='tight')
    plt.close()
