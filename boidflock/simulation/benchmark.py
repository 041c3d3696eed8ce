"""
Benchmark simulation for performance testing and data collection.
"""

import time
from typing import Any, Dict, Optional

import pygame

try:
    import numpy as np
    import cv2
    VIDEO_SUPPORT = True
except ImportError:
    VIDEO_SUPPORT = False

from ..core.config import FlockConfig
from ..core.flock import Flock
from .render import draw_flock


# Sampling interval for time-series metrics
METRIC_TRACKING_INTERVAL = 10


class BenchmarkSimulation:
    """
    Benchmark simulation for measuring flock behavior.

    Runs headless by default but supports video recording.
    Collects flock-level statistics for analysis.
    """

    def __init__(self, config: Dict, enable_video: bool = False,
                 video_filename: Optional[str] = None, video_fps: int = 30):
        """
        Initialize benchmark simulation.

        Args:
            config: Configuration dictionary (FlockConfig fields)
            enable_video: Whether to record video
            video_filename: Output video filename
            video_fps: Video frame rate
        """
        self.config = config
        self.flock = Flock(FlockConfig.from_dict(config))

        width = int(self.flock.config.worldWidth)
        height = int(self.flock.config.worldHeight)

        # Video recording
        self.enable_video = enable_video and VIDEO_SUPPORT and video_filename is not None
        self.video_writer = None
        self.video_filename = video_filename
        self.frame_skip = max(1, config.get("fpsTarget", 60) // video_fps)
        self.screen = None

        if self.enable_video:
            pygame.init()
            self.screen = pygame.display.set_mode((width, height))
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.video_writer = cv2.VideoWriter(
                self.video_filename, fourcc, video_fps, (width, height)
            )
            print(f"  Recording video to: {self.video_filename}")

        self.frame_count = 0
        self.start_time = time.time()

        # Statistics
        self.stats = {
            "speed_sum": 0.0,
            "cohesion_sum": 0.0,
            "polarization_sum": 0.0,
            "samples": 0,
            "cohesion_over_time": [],
            "polarization_over_time": [],
        }

    def update(self) -> None:
        """Advance the flock one tick and record statistics."""
        self.flock.tick()
        self.frame_count += 1
        self._update_statistics()

    def _update_statistics(self) -> None:
        """Update tracking statistics."""
        cohesion = self.flock.cohesion()
        polarization = self.flock.polarization()

        self.stats["speed_sum"] += self.flock.average_speed()
        self.stats["cohesion_sum"] += cohesion
        self.stats["polarization_sum"] += polarization
        self.stats["samples"] += 1

        if self.frame_count % METRIC_TRACKING_INTERVAL == 0:
            self.stats["cohesion_over_time"].append({
                "frame": self.frame_count,
                "cohesion": cohesion,
                "agent_count": len(self.flock),
            })
            self.stats["polarization_over_time"].append({
                "frame": self.frame_count,
                "polarization": polarization,
            })

    def run_benchmark(self, max_frames: int) -> Dict[str, Any]:
        """
        Run benchmark for specified number of frames.

        Args:
            max_frames: Maximum frames to simulate

        Returns:
            Results dictionary with all statistics
        """
        print(f"Running benchmark for {max_frames} frames...")

        while self.frame_count < max_frames:
            self.update()

            if self.video_writer and self.frame_count % self.frame_skip == 0:
                self._render_frame()
                self._capture_frame()

            if self.frame_count % 1000 == 0:
                elapsed = time.time() - self.start_time
                progress = (self.frame_count / max_frames) * 100
                print(f"  Progress: {progress:.1f}% ({self.frame_count}/{max_frames} frames, "
                      f"{elapsed:.1f}s elapsed, {self.flock.replaced_count} replaced)")

        if self.video_writer:
            self.video_writer.release()
            pygame.quit()
            print("  Video saved successfully!")

        return self.get_results()

    def _render_frame(self) -> None:
        """Render frame for video capture."""
        draw_flock(self.screen, self.flock, self.flock.config, mode=2)
        pygame.display.flip()

    def _capture_frame(self) -> None:
        """Capture frame to video."""
        frame = pygame.surfarray.array3d(self.screen)
        frame = np.transpose(frame, (1, 0, 2))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
        self.video_writer.write(frame)

    def get_results(self) -> Dict[str, Any]:
        """
        Get benchmark results.

        Returns:
            Dictionary containing all statistics and derived metrics
        """
        elapsed = time.time() - self.start_time
        samples = self.stats["samples"]

        def mean(key):
            return self.stats[key] / samples if samples else 0

        return {
            "frames": self.frame_count,
            "elapsed_time_seconds": elapsed,
            "avg_speed": mean("speed_sum"),
            "avg_cohesion": mean("cohesion_sum"),
            "avg_polarization": mean("polarization_sum"),
            "final_cohesion": self.flock.cohesion(),
            "total_replacements": self.flock.replaced_count,
            "final_agent_count": len(self.flock),
            "cohesion_over_time": self.stats["cohesion_over_time"],
            "polarization_over_time": self.stats["polarization_over_time"],
        }
