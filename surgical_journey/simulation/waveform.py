from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from .rng import RandomSource, resolve_rng, symmetric

WINDOW_SECONDS = 5.0
JITTER = 0.025


def cardiac_cycle_template(samples_per_cycle: int) -> np.ndarray:
    """One P-QRS-T cycle sampled at ``samples_per_cycle`` points."""
    phase = np.arange(samples_per_cycle, dtype=float) / samples_per_cycle
    values = np.zeros(samples_per_cycle, dtype=float)

    p_wave = phase < 0.2
    values[p_wave] = 0.25 * np.sin(phase[p_wave] / 0.2 * np.pi)

    qrs = (phase >= 0.2) & (phase < 0.3)
    values[qrs] = np.where(phase[qrs] < 0.25, -1.0, 1.5)

    t_wave = (phase >= 0.3) & (phase < 0.7)
    values[t_wave] = 0.5 * np.sin((phase[t_wave] - 0.5) / 0.4 * np.pi)
    return values


def generate_waveform(
    heart_rate: float,
    sample_count: int = 100,
    rng: Optional[RandomSource] = None,
) -> List[Tuple[float, float]]:
    """Synthetic ECG trace over a 5 second window.

    Args:
        heart_rate: beats per minute, must be positive
        sample_count: number of (time, amplitude) points

    Returns:
        list of (seconds, amplitude) pairs, time starting at 0
    """
    if not heart_rate or heart_rate <= 0 or math.isnan(heart_rate):
        raise ValueError(f"heart_rate must be positive, got {heart_rate!r}")
    if sample_count <= 0:
        raise ValueError(f"sample_count must be positive, got {sample_count!r}")
    rng = resolve_rng(rng)

    dt = WINDOW_SECONDS / sample_count
    cycle_length = 60.0 / heart_rate
    samples_per_cycle = max(1, int(math.floor(cycle_length / dt)))
    template = cardiac_cycle_template(samples_per_cycle)

    points: List[Tuple[float, float]] = []
    for i in range(sample_count):
        value = float(template[i % samples_per_cycle]) + symmetric(rng, JITTER)
        points.append((i * dt, value))
    return points
