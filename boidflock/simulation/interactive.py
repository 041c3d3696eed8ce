"""
Interactive simulation with pygame GUI.
"""

import dataclasses
import json
import sys
from typing import Optional

import pygame

from ..core.config import FlockConfig, DEFAULT_CONFIG
from ..core.flock import Flock
from .render import draw_flock


class Simulation:
    """
    Interactive flock simulation with pygame visualization.

    Acts as the host driver: ticks the flock once per frame and renders the
    snapshot it exposes.
    """

    def __init__(self, config: Optional[FlockConfig] = None):
        """
        Initialize the simulation.

        Args:
            config: Flock configuration (uses defaults if None)
        """
        pygame.init()

        self.config = dataclasses.replace(config if config else DEFAULT_CONFIG)

        width = int(self.config.worldWidth)
        height = int(self.config.worldHeight)

        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Boid Flock")
        self.clock = pygame.time.Clock()

        self.flock = Flock(self.config)

        self.frame_count = 0
        self.running = True
        self.paused = False
        self.visualization_mode = self.config.visualizationMode

        self.stats = {
            "avg_speed": 0,
            "flock_cohesion": 0,
            "polarization": 0,
            "replaced": 0,
        }

    def update(self) -> None:
        """Update simulation state for one frame."""
        if not self.paused:
            self.flock.tick()
            self.frame_count += 1
        self._update_statistics()

    def _update_statistics(self) -> None:
        """Update simulation statistics."""
        self.stats["avg_speed"] = self.flock.average_speed()
        self.stats["flock_cohesion"] = self.flock.cohesion()
        self.stats["polarization"] = self.flock.polarization()
        self.stats["replaced"] = self.flock.replaced_count

    def draw(self) -> None:
        """Render the current frame."""
        draw_flock(self.screen, self.flock, self.config, self.visualization_mode)
        self._draw_stats()
        pygame.display.flip()

    def _draw_stats(self) -> None:
        """Draw statistics overlay."""
        font = pygame.font.Font(None, 24)
        y_offset = 10

        stats_text = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Agents: {len(self.flock)}",
            f"Replaced: {self.stats['replaced']}",
            f"Avg Speed: {self.stats['avg_speed']:.2f}",
            f"Cohesion: {self.stats['flock_cohesion']:.1f}",
            f"Polarization: {self.stats['polarization']:.2f}",
        ]
        if self.paused:
            stats_text.append("PAUSED")

        for text in stats_text:
            surface = font.render(text, True, (60, 60, 60))
            self.screen.blit(surface, (10, y_offset))
            y_offset += 25

    def save_snapshot(self) -> None:
        """Save the current flock snapshot to a JSON file."""
        snapshot_data = {
            "frame_count": self.frame_count,
            "agent_count": len(self.flock),
            "statistics": self.stats,
            "agents": [agent._asdict() for agent in self.flock.agents()],
            "config": self.config.to_dict(),
        }

        try:
            with open(self.config.snapshotOutputFile, 'w') as f:
                json.dump(snapshot_data, f, indent=4)
            print(f"Snapshot saved to {self.config.snapshotOutputFile}")
        except OSError as e:
            print(f"Error saving snapshot: {e}")

    def run(self) -> None:
        """Run the simulation main loop."""
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event.key)

            self.update()
            self.draw()
            self.clock.tick(self.config.fpsTarget)

        self.save_snapshot()
        pygame.quit()
        sys.exit()

    def _handle_keydown(self, key: int) -> None:
        """Handle keyboard input."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_p:
            self.paused = not self.paused
        elif key == pygame.K_v:
            self.visualization_mode = (self.visualization_mode + 1) % 3
        elif key == pygame.K_SPACE:
            self.save_snapshot()
