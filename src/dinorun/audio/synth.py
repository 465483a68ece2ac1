"""
Tone synthesis for sound effects.

Pure Python oscillators with a pitch glide and an attack/release gain
envelope, rendered to signed 16-bit mono samples.
"""

import math
import array
from enum import Enum
from dataclasses import dataclass
from typing import Optional

SILENCE = 0.0001  # exponential ramps cannot reach 0
TAIL = 0.02  # oscillator keeps running a little after the release


class WaveType(Enum):
    """Oscillator waveform types."""
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


@dataclass
class Envelope:
    """Linear attack to a peak, then exponential decay to silence.

    The decay runs from the end of the attack until ``duration + release``
    seconds after note start.
    """
    peak: float = 0.3
    attack: float = 0.01   # seconds
    duration: float = 0.2  # seconds
    release: float = 0.12  # seconds

    @property
    def end(self) -> float:
        return self.duration + self.release

    def get_amplitude(self, time: float) -> float:
        """Calculate envelope amplitude at given time."""
        if time <= 0:
            return SILENCE

        if time < self.attack:
            return SILENCE + (self.peak - SILENCE) * (time / self.attack)

        if time >= self.end:
            return SILENCE

        span = self.end - self.attack
        if span <= 0 or self.peak <= SILENCE:
            return SILENCE
        progress = (time - max(self.attack, 0.0)) / span
        return self.peak * (SILENCE / self.peak) ** progress


@dataclass(frozen=True)
class Tone:
    """One sound effect voice."""
    frequency: float
    duration: float
    wave_type: WaveType = WaveType.SINE
    volume: float = 0.3
    attack: float = 0.01
    release: float = 0.12
    pitch_end: Optional[float] = None

    @property
    def length(self) -> float:
        """Total playback length in seconds."""
        return self.duration + self.release + TAIL

    @property
    def envelope(self) -> Envelope:
        return Envelope(
            peak=self.volume,
            attack=self.attack,
            duration=self.duration,
            release=self.release,
        )

    def frequency_at(self, time: float) -> float:
        """Linear glide to ``pitch_end`` over the tone's duration, then hold."""
        if self.pitch_end is None or self.duration <= 0:
            return self.frequency
        progress = min(max(time / self.duration, 0.0), 1.0)
        return self.frequency + (self.pitch_end - self.frequency) * progress


def oscillator(wave_type: WaveType, phase: float) -> float:
    """Single waveform sample for a phase in [0, 1)."""
    if wave_type == WaveType.SINE:
        return math.sin(2 * math.pi * phase)

    elif wave_type == WaveType.SQUARE:
        return 1.0 if phase < 0.5 else -1.0

    elif wave_type == WaveType.SAWTOOTH:
        return 2.0 * phase - 1.0

    elif wave_type == WaveType.TRIANGLE:
        if phase < 0.5:
            return 4.0 * phase - 1.0
        else:
            return 3.0 - 4.0 * phase

    raise ValueError(f"Unknown wave type: {wave_type}")


def render_tone(tone: Tone, sample_rate: int = 44100) -> array.array:
    """Render a tone to signed 16-bit mono samples."""
    num_samples = int(sample_rate * tone.length)
    samples = array.array('h')  # signed short
    envelope = tone.envelope
    phase = 0.0

    for i in range(num_samples):
        time = i / sample_rate
        value = oscillator(tone.wave_type, phase) * envelope.get_amplitude(time)
        samples.append(int(max(-32767, min(32767, value * 32767))))

        # Advance phase
        phase += tone.frequency_at(time) / sample_rate
        phase -= math.floor(phase)

    return samples
