"""Octave-band tables, biquad filter responses, chart ranges, and crossover and equalizer models for loudspeakers."""

__version__ = "0.1.0"