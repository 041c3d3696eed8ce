"""
Export functions for saving benchmark results to CSV and JSON.
"""

import csv
import json
from typing import Any, Dict, List, Optional

import numpy as np


def export_results_to_csv(results_by_preset: Dict[str, List[Dict]],
                          filename: str = "benchmark_results.csv") -> str:
    """
    Export per-trial benchmark results to CSV format.

    Args:
        results_by_preset: Mapping of rule preset name to its trial results
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['simulation_id', 'avg_speed', 'avg_cohesion',
                      'avg_polarization', 'total_replacements', 'final_agent_count']
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)

        writer.writeheader()

        for preset, results in results_by_preset.items():
            for result in results:
                writer.writerow({
                    'simulation_id': f"{preset}_trial{result.get('trial', 1)}",
                    'avg_speed': result['avg_speed'],
                    'avg_cohesion': result['avg_cohesion'],
                    'avg_polarization': result['avg_polarization'],
                    'total_replacements': result['total_replacements'],
                    'final_agent_count': result['final_agent_count'],
                })

    print(f"\nCSV results saved to: {filename}")
    return filename


def export_cohesion_timeseries_to_csv(results_by_preset: Dict[str, Dict],
                                      population_size: int,
                                      filename: Optional[str] = None) -> str:
    """
    Export cohesion time-series data for several presets to CSV.

    Frames missing from a preset's series are left empty.

    Args:
        results_by_preset: Mapping of preset name to a single run's results
        population_size: Number of agents used
        filename: Output filename (auto-generated if None)

    Returns:
        Path to saved CSV file
    """
    if filename is None:
        filename = f"cohesion_timeseries_{population_size}_agents.csv"

    lookups = {
        preset: {e["frame"]: e["cohesion"] for e in result["cohesion_over_time"]}
        for preset, result in results_by_preset.items()
    }
    all_frames = sorted(set().union(*(lookup.keys() for lookup in lookups.values())))

    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['frame'] + [f"{preset}_cohesion" for preset in lookups]
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()

        for frame in all_frames:
            row = {'frame': frame}
            for preset, lookup in lookups.items():
                row[f"{preset}_cohesion"] = f"{lookup[frame]:.2f}" if frame in lookup else ''
            writer.writerow(row)

    print(f"  Cohesion time-series saved to: {filename}")
    return filename


def export_benchmark_report(results: Dict[str, Any], filename: str = "flock_benchmark_results.json") -> str:
    """
    Export full benchmark report to JSON.

    Args:
        results: Complete benchmark results dictionary
        filename: Output filename

    Returns:
        Path to saved JSON file
    """
    with open(filename, 'w') as f:
        json.dump(results, f, indent=2)

    print(f"\nBenchmark report saved to: {filename}")
    return filename


def calculate_aggregate_stats(trial_results: List[Dict]) -> Dict[str, float]:
    """
    Calculate mean and sample standard deviation across trials.

    Args:
        trial_results: List of result dictionaries from multiple trials

    Returns:
        Dictionary with mean and std for each metric
    """
    if not trial_results:
        return {}

    metrics = [
        "avg_speed", "avg_cohesion", "avg_polarization", "final_cohesion",
        "total_replacements", "elapsed_time_seconds",
    ]

    aggregates = {}

    for metric in metrics:
        values = np.array([r[metric] for r in trial_results if r.get(metric) is not None], dtype=float)
        if values.size:
            aggregates[f"{metric}_mean"] = float(values.mean())
            aggregates[f"{metric}_std"] = float(values.std(ddof=1)) if values.size > 1 else 0.0

    return aggregates
