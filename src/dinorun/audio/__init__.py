"""
Dino Run Audio System - synthesized sound effects.
"""

from .engine import AudioEngine
from .synth import Tone, WaveType, render_tone

__all__ = ["AudioEngine", "Tone", "WaveType", "render_tone"]
