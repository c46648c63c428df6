"""Synthesised sound cues for paddle hits, wall bounces and points."""
import logging

import numpy as np
import pygame

from simulation import Event

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# (frequency Hz, duration s, decay rate, volume)
CUES = {
    Event.HIT: (880, 0.06, 70, 0.6),
    Event.WALL: (440, 0.08, 50, 0.5),
    Event.SCORE: (220, 0.35, 8, 0.6),
}


def synth_tone(frequency, duration, decay, volume=0.5, sample_rate=SAMPLE_RATE):
    """Exponentially decaying sine as mono 16-bit samples."""
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    sig = np.exp(-t * decay) * np.sin(2 * np.pi * frequency * t) * volume
    return (np.clip(sig, -1.0, 1.0) * 32767).astype(np.int16)


def _to_mixer_layout(samples, channels):
    if channels == 1:
        return samples
    return np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))


class SoundBoard:
    """Fire-and-forget cue player. Runs silent when audio is unavailable."""

    def __init__(self, enabled=True):
        self.sounds = {}
        if not enabled:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            frequency, _, channels = pygame.mixer.get_init()
            for event, (tone, duration, decay, volume) in CUES.items():
                samples = synth_tone(tone, duration, decay, volume, sample_rate=frequency)
                self.sounds[event] = pygame.sndarray.make_sound(_to_mixer_layout(samples, channels))
        except pygame.error as exc:
            logger.warning("Audio unavailable, running silent: %s", exc)
            self.sounds = {}

    @property
    def enabled(self):
        return bool(self.sounds)

    def play(self, event):
        sound = self.sounds.get(event)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Could not play %s cue: %s", event.value, exc)

    def play_all(self, events):
        for event in events:
            self.play(event)
