# plotting/route.py

import matplotlib.pyplot as plt
import numpy as np
import polars as pl
from rundom.utils import bubble_outline
import os


def plot_session_route(trajectory_data: dict, targets: list = None, center=None,
                       radius_m: float = None, output_dir: str = 'data', show: bool = False):
    """
    Plot the walked route over the bubble and the stars.

    Parameters:
        trajectory_data (dict): Dict with keys: position, captures.
        targets (list of Target): Optional list of Target objects with .position, .label, .captured
        center (GeoPoint): Bubble center, drawn with its outline when radius_m is given
        output_dir (str): Directory to save the figure.
    """
    pos = np.array([p.as_tuple() for p in trajectory_data["position"]]).reshape(-1, 2)
    captures = trajectory_data.get("captures", [])

    fig, ax = plt.subplots()
    ax.set_title("Run Route")
    ax.set_xlabel("Longitude (deg)")
    ax.set_ylabel("Latitude (deg)")

    # --- Bubble outline
    if center is not None and radius_m:
        ring = bubble_outline(center, radius_m)
        ring_lon = [p.longitude for p in ring] + [ring[0].longitude]
        ring_lat = [p.latitude for p in ring] + [ring[0].latitude]
        ax.plot(ring_lon, ring_lat, '-', color='gray', lw=1, alpha=0.7, label="Bubble")
        ax.scatter(center.longitude, center.latitude, marker='x', color='gray')
        # keep the bubble round in metric terms
        ax.set_aspect(1 / np.cos(np.radians(center.latitude)))

    # --- Plot path (dotted line with points)
    if len(pos):
        ax.plot(pos[:, 1], pos[:, 0], 'k:', lw=1, label="Route")
        ax.scatter(pos[:, 1], pos[:, 0], s=4, color='black', alpha=0.5)

    # --- Mark where each star was collected
    for c in captures:
        idx = c["index"]
        if idx < len(pos):
            ax.scatter(pos[idx, 1], pos[idx, 0], s=30, marker='*', color='gold', zorder=3)

    # --- Plot stars as hollow circles with labels
    if targets:
        for t in targets:
            color = 'limegreen' if t.captured else 'navy'
            ax.scatter(t.position.longitude, t.position.latitude, s=60,
                       facecolors='none', edgecolors=color, linewidths=1.2)
            ax.annotate(t.label, (t.position.longitude, t.position.latitude),
                        textcoords="offset points", xytext=(0, 6),
                        ha='center', color=color, fontsize=6)

    ax.legend()
    plt.tight_layout()
    save_path = os.path.join(output_dir, 'route.png')
    fig.savefig(save_path, dpi=300)
    if show:
        plt.show()
    plt.close(fig)
    return save_path


def plot_nearest_distance(trajectory_data: dict, capture_threshold_m: float = None,
                          output_dir: str = "data", show: bool = False):
    """
    Plot the distance to the nearest remaining star at every tick.
    """
    df = pl.DataFrame({"distance": trajectory_data.get("nearest_distance", [])},
                      schema={"distance": pl.Float64})
    df = df.with_row_index("tick").drop_nulls("distance")

    fig, ax = plt.subplots()
    ax.plot(df["tick"].to_numpy(), df["distance"].to_numpy(), color='teal', lw=1)
    if capture_threshold_m is not None:
        ax.axhline(y=capture_threshold_m, linestyle='--', color='gray', alpha=0.6,
                   label="Capture threshold")
        ax.legend()
    for c in trajectory_data.get("captures", []):
        ax.axvline(x=c["index"], color='gold', alpha=0.6)
    ax.set_xlabel("Ticks")
    ax.set_ylabel("Distance to nearest star (m)")
    ax.set_title(f"Nearest Star Distance. Total Ticks: {df.height}")
    ax.grid(True)
    plt.tight_layout()
    save_path = os.path.join(output_dir, "distance_to_nearest.png")
    fig.savefig(save_path, dpi=300)
    if show:
        plt.show()
    plt.close(fig)
    return save_path
