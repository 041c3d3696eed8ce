"""
Main entry point for the flocking simulation.

Run with:
    python -m boidflock.main              # Interactive simulation
    python -m boidflock.main --benchmark  # Rule ablation benchmark
    python -m boidflock.main --cohesion   # Cohesion analysis only
"""

import logging
import os


# Rule presets compared by the benchmark
RULE_PRESETS = {
    "full_rules": {},
    "no_alignment": {"alignmentWeight": 0.0},
    "no_cohesion": {"cohesionWeight": 0.0},
}


def set_headless():
    """Enable headless mode for benchmarking."""
    os.environ["SDL_VIDEODRIVER"] = "dummy"


def run_interactive(population: int = 5, seed: int = None):
    """Run the interactive simulation with GUI."""
    from .simulation.interactive import Simulation
    from .core.config import FlockConfig

    print("=" * 60)
    print("Boid Flock Simulation")
    print("=" * 60)
    print("\nControls:")
    print("  ESC   - Quit")
    print("  P     - Pause/resume")
    print("  V     - Cycle visualization modes (0=normal, 1=vision, 2=impulses)")
    print("  SPACE - Save snapshot to JSON")
    print("\nImpulse colors (mode 2):")
    print("  orange=separation  green=alignment  yellow=cohesion  red=avoidance")
    print("\nStarting simulation...")

    config = FlockConfig(populationSize=population, seed=seed)
    sim = Simulation(config)
    sim.run()


def run_benchmark(num_trials: int = 10, duration: int = 2000, population: int = 60,
                  record_video: bool = False, video_trial: int = 1):
    """
    Run a rule ablation benchmark.

    Args:
        num_trials: Number of trials per preset
        duration: Duration in frames per trial
        population: Number of agents
        record_video: Whether to record video
        video_trial: Which trial to record
    """
    set_headless()

    from .simulation.benchmark import BenchmarkSimulation
    from .analysis.export import export_results_to_csv, calculate_aggregate_stats, export_benchmark_report
    from .analysis.plotting import plot_cohesion_over_time
    from .core.config import BENCHMARK_CONFIG

    print("=" * 60)
    print("RULE ABLATION BENCHMARK")
    print("=" * 60)
    print(f"Duration per trial: {duration} frames")
    print(f"Trials per preset: {num_trials}")
    print(f"Agents: {population}")
    print(f"Total simulations: {num_trials * len(RULE_PRESETS)}")
    if record_video:
        print(f"Video recording: ENABLED (trial {video_trial})")
    print()

    base_config = BENCHMARK_CONFIG.to_dict()
    base_config["populationSize"] = population

    results_by_preset = {}
    for name, overrides in RULE_PRESETS.items():
        print(f"\n{'=' * 60}")
        print(f"Benchmarking: {name}")
        print(f"{'=' * 60}")

        results = []
        for trial in range(num_trials):
            print(f"\nTrial {trial + 1}/{num_trials}")

            config = base_config.copy()
            config.update(overrides)
            config["seed"] = 42 + trial

            enable_video = record_video and (trial + 1) == video_trial
            video_file = f"recording_{name}_trial{trial + 1}.mp4" if enable_video else None

            sim = BenchmarkSimulation(config, enable_video=enable_video, video_filename=video_file)
            result = sim.run_benchmark(duration)
            result["trial"] = trial + 1
            if enable_video:
                result["video_file"] = video_file
            results.append(result)

        results_by_preset[name] = results

    aggregates = {name: calculate_aggregate_stats(results) for name, results in results_by_preset.items()}

    tightest = min(aggregates, key=lambda name: aggregates[name].get("avg_cohesion_mean", float('inf')))
    most_aligned = max(aggregates, key=lambda name: aggregates[name].get("avg_polarization_mean", 0))

    report = {
        "benchmark_config": {"duration_frames": duration, "trials_per_preset": num_trials,
                             "population": population},
        "presets": {
            name: {"overrides": RULE_PRESETS[name], "trial_results": results_by_preset[name],
                   "aggregates": aggregates[name]}
            for name in RULE_PRESETS
        },
        "comparison": {
            "tightest_flock": tightest,
            "most_aligned": most_aligned,
        },
    }

    export_benchmark_report(report)
    export_results_to_csv(results_by_preset)

    print("\n" + "=" * 60)
    print("BENCHMARK RESULTS SUMMARY")
    print("=" * 60)

    for name, agg in aggregates.items():
        print(f"\n{name.upper()}:")
        print(f"   Cohesion: {agg.get('avg_cohesion_mean', 0):.2f} +/- {agg.get('avg_cohesion_std', 0):.2f}")
        print(f"   Polarization: {agg.get('avg_polarization_mean', 0):.3f}")
        print(f"   Replacements: {agg.get('total_replacements_mean', 0):.1f}")

    print("\n" + "=" * 60)
    print(f"Tightest flock: {tightest}")
    print(f"Most aligned: {most_aligned}")

    print("\nGenerating comparison plot...")
    plot_cohesion_over_time(results_by_preset)

    return report


def run_cohesion_analysis(population_sizes: list = None, duration: int = 2000):
    """
    Run cohesion time-series analysis only.

    Args:
        population_sizes: List of population sizes to test
        duration: Duration in frames
    """
    set_headless()

    from .simulation.benchmark import BenchmarkSimulation
    from .analysis.export import export_cohesion_timeseries_to_csv
    from .analysis.plotting import plot_cohesion_comparison
    from .core.config import FlockConfig

    if population_sizes is None:
        population_sizes = [10, 30, 60, 120]

    print("=" * 70)
    print("COHESION TIME-SERIES ANALYSIS")
    print("=" * 70)
    print(f"Presets being compared: {', '.join(RULE_PRESETS)}")
    print(f"\nPopulation sizes: {population_sizes}")
    print(f"Duration: {duration} frames")
    print()

    all_results = {}
    csv_files = []

    for population in population_sizes:
        print(f"\n{'=' * 60}")
        print(f"TESTING {population} AGENTS")
        print(f"{'=' * 60}")

        results = {}
        for name, overrides in RULE_PRESETS.items():
            print(f"\nRunning {name}...")
            config = FlockConfig(populationSize=population, seed=42).to_dict()
            config.update(overrides)
            results[name] = BenchmarkSimulation(config).run_benchmark(duration)

        all_results[population] = results
        csv_files.append(export_cohesion_timeseries_to_csv(results, population))

        print(f"\nSummary for {population} agents:")
        for name, r in results.items():
            print(f"  {name}: cohesion={r['avg_cohesion']:.2f}, polarization={r['avg_polarization']:.3f}")

    print("\n" + "=" * 70)
    print("COHESION ANALYSIS COMPLETE")
    print("=" * 70)
    print(f"\nGenerated CSV files: {csv_files}")

    print("\nGenerating cohesion comparison plot...")
    plot_cohesion_comparison(all_results, population_sizes)

    return all_results, csv_files


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Boid Flock Simulation")
    parser.add_argument("--benchmark", action="store_true", help="Run rule ablation benchmark")
    parser.add_argument("--cohesion", action="store_true", help="Run cohesion analysis only")
    parser.add_argument("--trials", type=int, default=10, help="Number of benchmark trials")
    parser.add_argument("--duration", type=int, default=2000, help="Simulation duration in frames")
    parser.add_argument("--population", type=int, default=None, help="Number of agents")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the interactive run")
    parser.add_argument("--record-video", action="store_true", help="Record video during benchmark")
    parser.add_argument("--verbose", action="store_true", help="Log flock lifecycle events")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.benchmark:
        run_benchmark(
            num_trials=args.trials,
            duration=args.duration,
            population=args.population or 60,
            record_video=args.record_video,
        )
    elif args.cohesion:
        run_cohesion_analysis(duration=args.duration)
    else:
        run_interactive(population=args.population or 5, seed=args.seed)


if __name__ == "__main__":
    main()
