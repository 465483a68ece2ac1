"""
Dino Run Audio Engine - short synthesized sound effects.

Sounds are rendered on first use and played through pygame.mixer. When no
audio device is available every call degrades to a no-op.
"""

import array
import logging
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from dinorun.audio.synth import Tone, WaveType, render_tone
from dinorun.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
MASTER_VOLUME = 0.35

START_TONES: Tuple[Tone, ...] = (
    Tone(frequency=420, pitch_end=560, duration=0.18, wave_type=WaveType.TRIANGLE, volume=0.35),
    Tone(frequency=640, pitch_end=720, duration=0.16, wave_type=WaveType.SQUARE, volume=0.22,
         attack=0.015),
)
JUMP_TONE = Tone(frequency=740, pitch_end=920, duration=0.22, wave_type=WaveType.SQUARE, volume=0.28)
HIT_TONE = Tone(frequency=220, pitch_end=90, duration=0.3, wave_type=WaveType.SAWTOOTH, volume=0.32,
                attack=0.005)


class AudioEngine:
    """Sound effects for the run: start jingle, jump blip, hit buzz."""

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        master_volume: float = MASTER_VOLUME,
        enabled: bool = True,
    ):
        self.sample_rate = sample_rate
        self.enabled = enabled
        self._volume_master = master_volume
        self._initialized = False
        self._unavailable = False
        self._sounds: Dict[Tone, pygame.mixer.Sound] = {}
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def master_volume(self) -> float:
        return self._volume_master

    def set_master_volume(self, volume: float) -> None:
        self._volume_master = max(0.0, min(1.0, volume))
        for sound in self._sounds.values():
            sound.set_volume(self._volume_master)

    def ensure_audio(self) -> bool:
        """Initialize the mixer on first use. Returns False if audio is unavailable."""
        if not self.enabled or self._unavailable:
            return False
        if self._initialized:
            return True

        try:
            pygame.mixer.pre_init(self.sample_rate, -16, 2, 512)
            pygame.mixer.init()
            self._initialized = True
            logger.info("Audio engine initialized")
            return True
        except Exception as e:
            self._unavailable = True
            logger.warning(f"Audio unavailable: {e}")
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _sound_for(self, tone: Tone) -> pygame.mixer.Sound:
        sound = self._sounds.get(tone)
        if sound is None:
            sound = self._create_sound(render_tone(tone, self.sample_rate))
            sound.set_volume(self._volume_master)
            self._sounds[tone] = sound
        return sound

    # ===== PLAYBACK API =====

    def play_tone(
        self,
        frequency: float,
        duration: float,
        wave_type: WaveType = WaveType.SINE,
        volume: float = 0.3,
        attack: float = 0.01,
        release: float = 0.12,
        pitch_end: Optional[float] = None,
    ) -> Optional[pygame.mixer.Channel]:
        """Play a single gliding tone through the master output."""
        return self.play(Tone(
            frequency=frequency,
            duration=duration,
            wave_type=wave_type,
            volume=volume,
            attack=attack,
            release=release,
            pitch_end=pitch_end,
        ))

    def play(self, tone: Tone) -> Optional[pygame.mixer.Channel]:
        if not self.ensure_audio():
            return None
        try:
            return self._sound_for(tone).play()
        except Exception as e:
            logger.warning(f"Failed to play tone {tone.frequency:.0f}Hz: {e}")
            return None

    def play_start_sound(self) -> None:
        for tone in START_TONES:
            self.play(tone)

    def play_jump_sound(self) -> None:
        self.play(JUMP_TONE)

    def play_hit_sound(self) -> None:
        self.play(HIT_TONE)

    # ===== GAME HOOKS =====

    def attach(self, event_bus: EventBus) -> None:
        """Play the run's sound effects from controller notifications."""
        self.detach()
        self._unsubscribers = [
            event_bus.subscribe(EventType.RUN_STARTED, self._on_run_started),
            event_bus.subscribe(EventType.JUMP, lambda event: self.play_jump_sound()),
            event_bus.subscribe(EventType.RUN_ENDED, lambda event: self.play_hit_sound()),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_run_started(self, event: Event) -> None:
        # A run start is the first user gesture, so the mixer comes up here
        self.ensure_audio()
        self.play_start_sound()

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        self.detach()
        self._sounds.clear()
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
