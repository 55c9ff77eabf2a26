"""
Visualization module for the nation's region map and stat timeline.
Generates matplotlib-based images of a nation's current state.
"""

from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
from matplotlib.patches import Polygon
import numpy as np

from config import GameConfig, stat_label
from crisis import build_map_crises
from geography import TerrainType
from nation import Nation


class Visualizer:
    """Handles all visualization and plotting."""

    def __init__(self, config: GameConfig):
        self.config = config

        # Outline colors by terrain; fill comes from stability
        self.terrain_colors = {
            TerrainType.PLAINS: '#2ca02c',
            TerrainType.HIGHLANDS: '#7f7f7f',
            TerrainType.COASTAL: '#1f77b4',
            TerrainType.RIVERLAND: '#17becf',
            TerrainType.INDUSTRIAL: '#8c564b',
            TerrainType.FRONTIER: '#F4A460',
        }
        self.severity_sizes = {"low": 80, "medium": 180, "high": 320}
        self.severity_colors = {"low": '#FBBF24', "medium": '#F97316', "high": '#DC2626'}
        self.cmap = plt.get_cmap('RdYlGn')

    def create_region_map(self, nation: Nation, output_path: Optional[Path] = None) -> Path:
        """
        Draw region outlines filled by stability, with surfaced crises as markers.
        """
        fig, ax = plt.subplots(figsize=(10, 10))
        ax.set_title(f'{nation.name} - {nation.era} (turn {nation.issues_resolved})',
                     fontsize=14, fontweight='bold')

        for region in nation.regions:
            patch = Polygon(
                np.asarray(region.shape, dtype=float),
                closed=True,
                facecolor=self.cmap(region.stability / 100.0),
                edgecolor=self.terrain_colors.get(region.terrain, 'black'),
                linewidth=2.5,
                alpha=0.8,
            )
            ax.add_patch(patch)
            cx, cy = region.centroid()
            ax.text(cx, cy, f'{region.name}\n{region.specialization.value}',
                    ha='center', va='center', fontsize=8)

        crises = build_map_crises(nation.crisis_arcs, self.config.map_crises_cap)
        for arc in crises:
            ax.scatter(arc.x, arc.y, s=self.severity_sizes[arc.severity],
                       c=self.severity_colors[arc.severity], edgecolors='black', zorder=3)
            ax.annotate(f'{arc.label} ({arc.stage}/{arc.max_stage})', (arc.x, arc.y),
                        xytext=(6, 6), textcoords='offset points', fontsize=7)

        ax.set_xlim(0, 100)
        ax.set_ylim(100, 0)  # map canvas has y growing downwards
        ax.set_aspect('equal')
        ax.axis('off')

        sm = plt.cm.ScalarMappable(cmap=self.cmap, norm=plt.Normalize(0, 100))
        fig.colorbar(sm, ax=ax, fraction=0.03, label='Regional stability')

        output_path = output_path or self.config.output_dir / f'{nation.id}_map.png'
        plt.tight_layout()
        plt.savefig(output_path, dpi=120, bbox_inches='tight')
        plt.close()
        return output_path

    def plot_stat_timeline(self, snapshots: List[Dict], output_path: Path, era: Optional[str] = None):
        """Bounded stats over turns; each snapshot is {"turn": int, "stats": {...}}."""
        turns = [s['turn'] for s in snapshots]
        stats = ['economy', 'happiness', 'crime', 'technology', 'environment', 'civilRights']

        fig, ax = plt.subplots(figsize=(12, 6))
        for stat in stats:
            values = [s['stats'].get(stat, 0) for s in snapshots]
            ax.plot(turns, values, linewidth=2, label=stat_label(stat, era))
        ax.set_title('National Indicators', fontweight='bold')
        ax.set_xlabel('Turn')
        ax.set_ylabel('Value (0-100)')
        ax.set_ylim(0, 100)
        ax.grid(True, alpha=0.3)
        ax.legend()

        plt.tight_layout()
        plt.savefig(output_path, dpi=120, bbox_inches='tight')
        plt.close()
