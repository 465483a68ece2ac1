"""Tone synthesis and the audio engine's degraded paths."""

import logging

import pygame
import pytest

from dinorun.audio import engine as engine_module
from dinorun.audio.engine import HIT_TONE, JUMP_TONE, START_TONES, AudioEngine
from dinorun.audio.synth import SILENCE, Envelope, Tone, WaveType, oscillator, render_tone
from dinorun.core.events import Event, EventBus, EventType


class TestSynth:
    def test_oscillator_shapes(self):
        assert oscillator(WaveType.SQUARE, 0.1) == 1.0
        assert oscillator(WaveType.SQUARE, 0.6) == -1.0
        assert oscillator(WaveType.TRIANGLE, 0.0) == -1.0
        assert oscillator(WaveType.TRIANGLE, 0.5) == 1.0
        assert oscillator(WaveType.SAWTOOTH, 0.75) == pytest.approx(0.5)
        assert oscillator(WaveType.SINE, 0.25) == pytest.approx(1.0)

    def test_pitch_glide(self):
        tone = Tone(frequency=740, pitch_end=920, duration=0.22)
        assert tone.frequency_at(0) == 740
        assert tone.frequency_at(0.11) == pytest.approx(830)
        assert tone.frequency_at(0.3) == 920
        assert Tone(frequency=440, duration=0.1).frequency_at(0.05) == 440

    def test_envelope(self):
        env = Envelope(peak=0.3, attack=0.01, duration=0.2, release=0.1)
        assert env.get_amplitude(0) == SILENCE
        assert env.get_amplitude(0.005) == pytest.approx(0.15, rel=0.01)
        assert env.get_amplitude(0.01) == pytest.approx(0.3)
        assert env.get_amplitude(0.1) > env.get_amplitude(0.2) > env.get_amplitude(0.29)
        assert env.get_amplitude(0.31) == SILENCE

    def test_render_length_and_levels(self):
        samples = render_tone(JUMP_TONE, sample_rate=8000)
        assert len(samples) == int(8000 * JUMP_TONE.length)
        assert abs(samples[0]) < 10
        peak = max(abs(s) for s in samples)
        assert 0.25 * 32767 < peak <= 0.28 * 32767 + 1
        tail_start = int(8000 * (JUMP_TONE.duration + JUMP_TONE.release)) + 1
        assert all(abs(s) < 10 for s in samples[tail_start:])


class RecordingAudio(AudioEngine):
    """Engine that records tones instead of touching the mixer."""

    def __init__(self):
        super().__init__()
        self.played = []

    def ensure_audio(self):
        return True

    def play(self, tone):
        self.played.append(tone)
        return None


class TestAudioEngine:
    def test_disabled_engine_is_silent(self):
        audio = AudioEngine(enabled=False)
        assert audio.ensure_audio() is False
        assert audio.play_jump_sound() is None
        assert audio.play_tone(440, 0.1) is None

    def test_mixer_failure_degrades_once(self, monkeypatch, caplog):
        calls = []

        def broken_init(*args, **kwargs):
            calls.append(1)
            raise pygame.error("no audio device")

        monkeypatch.setattr(engine_module.pygame.mixer, "pre_init", lambda *a, **k: None)
        monkeypatch.setattr(engine_module.pygame.mixer, "init", broken_init)

        audio = AudioEngine()
        with caplog.at_level(logging.WARNING):
            assert audio.ensure_audio() is False
            audio.play_hit_sound()
            audio.play_start_sound()

        assert calls == [1]
        assert "Audio unavailable" in caplog.text
        assert audio.initialized is False

    def test_notifications_play_sounds(self):
        bus = EventBus()
        audio = RecordingAudio()
        audio.attach(bus)

        bus.emit(Event(EventType.RUN_STARTED))
        bus.emit(Event(EventType.JUMP))
        bus.emit(Event(EventType.RUN_ENDED))
        assert audio.played == [*START_TONES, JUMP_TONE, HIT_TONE]

        audio.detach()
        bus.emit(Event(EventType.JUMP))
        assert len(audio.played) == 4

    def test_master_volume_clamped(self):
        audio = AudioEngine(enabled=False)
        audio.set_master_volume(3)
        assert audio.master_volume == 1.0
