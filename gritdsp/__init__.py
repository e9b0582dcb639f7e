"""Sample-by-sample audio processors: amp simulations, dither, delay lines, dynamics and envelopes."""

__version__ = "0.1.0"

__all__ = [
    "cabinet",
    "delay",
    "dynamics",
    "envelope",
    "fire_amp",
    "grind_amp",
    "grind_cabinet",
    "vinyl_dither",
]