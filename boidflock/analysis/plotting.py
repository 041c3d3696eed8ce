"""
Plotting functions for visualizing benchmark results.
"""

from typing import Dict, List

try:
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False


PRESET_COLORS = ['#4ECDC4', '#FF6B6B', '#FFB347', '#95E1D3']


def plot_cohesion_over_time(results_by_preset: Dict[str, List[Dict]],
                            output_file: str = "flock_cohesion_comparison.png",
                            show: bool = True) -> str:
    """
    Plot cohesion over time for each rule preset.

    Args:
        results_by_preset: Mapping of preset name to its trial results
        output_file: Output filename for the plot
        show: Whether to open a window after saving

    Returns:
        Path to saved plot file
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping plot.")
        return ""

    plt.figure(figsize=(12, 7))

    for idx, (preset, results) in enumerate(results_by_preset.items()):
        # Use first trial from each preset
        series = results[0]["cohesion_over_time"]
        frames = [d["frame"] for d in series]
        values = [d["cohesion"] for d in series]
        color = PRESET_COLORS[idx % len(PRESET_COLORS)]

        plt.plot(frames, values, label=preset, linewidth=2, color=color)
        if values:
            plt.text(frames[-1], values[-1], f' {values[-1]:.0f}',
                     verticalalignment='center', fontsize=9, color=color)

    plt.xlabel('Frame Number', fontsize=12, fontweight='bold')
    plt.ylabel('Cohesion (avg dist to centroid)', fontsize=12, fontweight='bold')
    plt.title('Rule Ablation: Flock Cohesion Over Time',
              fontsize=14, fontweight='bold', pad=20)
    plt.legend(fontsize=11, loc='upper right', framealpha=0.9)
    plt.grid(True, alpha=0.3, linestyle='--')

    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"\nPlot saved to: {output_file}")

    if show:
        plt.show()
    plt.close()
    return output_file


def plot_cohesion_comparison(all_results: Dict[int, Dict[str, Dict]],
                             population_sizes: List[int],
                             output_file: str = "cohesion_comparison_all_populations.png",
                             show: bool = True) -> str:
    """
    Create a multi-panel plot showing cohesion over time for each population size.

    Args:
        all_results: Mapping of population size to {preset name: results}
        population_sizes: Population sizes tested (first four are plotted)
        output_file: Output filename for the plot
        show: Whether to open a window after saving

    Returns:
        Path to saved plot file
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping plot.")
        return ""

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    axes = axes.flatten()

    for idx, population_size in enumerate(population_sizes[:4]):
        ax = axes[idx]

        for color_idx, (preset, result) in enumerate(all_results[population_size].items()):
            series = result["cohesion_over_time"]
            frames = [d["frame"] for d in series]
            values = [d["cohesion"] for d in series]
            color = PRESET_COLORS[color_idx % len(PRESET_COLORS)]

            ax.plot(frames, values, label=preset, linewidth=2, color=color, alpha=0.8)
            if values:
                ax.annotate(f'{values[-1]:.0f}', xy=(frames[-1], values[-1]),
                            xytext=(5, 0), textcoords='offset points',
                            fontsize=8, color=color)

        ax.set_xlabel('Frame Number', fontsize=10)
        ax.set_ylabel('Cohesion (avg dist to centroid)', fontsize=10)
        ax.set_title(f'{population_size} Agents', fontsize=12, fontweight='bold')
        ax.legend(fontsize=8, loc='upper right')
        ax.grid(True, alpha=0.3, linestyle='--')

    for ax in axes[len(population_sizes[:4]):]:
        ax.set_visible(False)

    plt.suptitle('Cohesion Over Time by Population Size\n'
                 '(Lower values = tighter flock)',
                 fontsize=14, fontweight='bold', y=1.02)
    plt.tight_layout()

    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"\nCohesion comparison plot saved to: {output_file}")

    if show:
        plt.show()
    plt.close(fig)
    return output_file
