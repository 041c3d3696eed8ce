"""
Analysis module for plotting and exporting simulation results.
"""

from .plotting import plot_cohesion_over_time, plot_cohesion_comparison
from .export import (
    export_results_to_csv, export_cohesion_timeseries_to_csv,
    export_benchmark_report, calculate_aggregate_stats,
)

__all__ = [
    'plot_cohesion_over_time',
    'plot_cohesion_comparison',
    'export_results_to_csv',
    'export_cohesion_timeseries_to_csv',
    'export_benchmark_report',
    'calculate_aggregate_stats',
]
