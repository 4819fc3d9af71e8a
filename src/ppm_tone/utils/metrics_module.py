"""
metrics_module.py — small diagnostics helpers for the tone pipeline

WHAT THIS MODULE PROVIDES
-------------------------
• tone_summary(pixels, channels)
    Per-channel mean / min / max of a raw 8-bit buffer. Handy for checking
    that sepia saturates R and G on bright inputs and that greyscale stays
    below 255.

• plot_histogram(pixels, channels)
    Histogram of each channel in 0..255. Good for spotting clipping.

• plot_before_after(rgb, pixels, header, mode, path)
    Two-panel figure (input | converted) saved to disk. Used by the CLI's
    --preview switch.

NOTES
-----
• Figures are built with matplotlib.figure.Figure directly, not pyplot: no
  backend is selected, no global figure registry is touched, nothing needs
  closing, and savefig renders through Agg, so the CLI stays usable in pipes.

© 2025 Ali Pouya — PPM Tone (classic edition)
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict
import numpy as np
from matplotlib.figure import Figure

from ppm_tone.header.header_parser import HeaderRecord
from ppm_tone.transforms.tone_model import TransformMode, output_channels

CHANNEL_NAMES = {1: ("Y",), 3: ("R", "G", "B")}
CHANNEL_COLORS = {"Y": "gray", "R": "tab:red", "G": "tab:green", "B": "tab:blue"}


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _as_planes(pixels: bytes, channels: int) -> np.ndarray:
    """View a raw buffer as (N, channels) uint8."""
    if channels not in CHANNEL_NAMES:
        raise ValueError(f"channels must be 1 or 3, got {channels}")
    arr = np.frombuffer(pixels, dtype=np.uint8)
    if arr.size % channels:
        raise ValueError(f"{arr.size} bytes is not a whole number of {channels}-channel pixels")
    return arr.reshape(-1, channels)


def _as_image(pixels: bytes, header: HeaderRecord, channels: int) -> np.ndarray:
    shape = (header.height, header.width) if channels == 1 else (header.height, header.width, 3)
    return np.frombuffer(pixels, dtype=np.uint8).reshape(shape)


# -----------------------------------------------------------------------------
# Channel statistics
# -----------------------------------------------------------------------------
def tone_summary(pixels: bytes, channels: int) -> Dict[str, Dict[str, float]]:
    """
    Per-channel statistics of a raw buffer.

    Returns
    -------
    {channel_name: {"mean": float, "min": int, "max": int}}
    An empty buffer yields an empty dict.
    """
    planes = _as_planes(pixels, channels)
    if planes.shape[0] == 0:
        return {}
    summary = {}
    for i, name in enumerate(CHANNEL_NAMES[channels]):
        col = planes[:, i]
        summary[name] = {
            "mean": float(col.mean()),
            "min": int(col.min()),
            "max": int(col.max()),
        }
    return summary


# -----------------------------------------------------------------------------
# Plots
# -----------------------------------------------------------------------------
def plot_histogram(pixels: bytes, channels: int, title: str = "Histogram", bins: int = 64) -> Figure:
    """
    Plot one histogram per channel over 0..255 and return the Figure.
    """
    planes = _as_planes(pixels, channels)
    fig = Figure()
    ax = fig.add_subplot(1, 1, 1)
    for i, name in enumerate(CHANNEL_NAMES[channels]):
        ax.hist(planes[:, i], bins=int(bins), range=(0, 255), alpha=0.5,
                color=CHANNEL_COLORS[name], label=name)
    ax.set_title(title)
    ax.set_xlabel("Value")
    ax.set_ylabel("Count")
    if channels > 1:
        ax.legend()
    fig.tight_layout()
    return fig


def plot_before_after(
    rgb: bytes,
    pixels: bytes,
    header: HeaderRecord,
    mode: TransformMode,
    path: str | Path,
) -> Path:
    """
    Save a two-panel Input | Output figure and return the path written.
    """
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)

    channels = output_channels(mode)
    before = _as_image(rgb, header, 3)
    after = _as_image(pixels, header, channels)
    vmax = max(header.max_value, 1)

    fig = Figure(figsize=(10, 4))
    axs = fig.subplots(1, 2)
    axs[0].imshow(before); axs[0].set_title("Input (P6)"); axs[0].axis("off")
    if channels == 1:
        axs[1].imshow(after, cmap="gray", vmin=0, vmax=vmax)
    else:
        axs[1].imshow(after)
    axs[1].set_title(f"Output ({mode.name.lower()})"); axs[1].axis("off")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    return path
