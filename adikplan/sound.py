"""Synthesised drum sounds, the instruments that own them, and sequencer events."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

PI = math.pi
MAX_AMPLITUDE = 0.8
SAMPLE_RATE = 44100


def _noise(rng: random.Random) -> float:
    return rng.random() * 2.0 - 1.0


def _synthesise(kind: str, rng: random.Random) -> list[float]:
    """Generate a short test signal whose shape depends on the sound kind."""
    if "kick" in kind:
        # Decaying low sine.
        length = SAMPLE_RATE // 4
        return [
            math.sin(2.0 * PI * 100.0 * i / SAMPLE_RATE) * (1.0 - i / length) * MAX_AMPLITUDE
            for i in range(length)
        ]
    if "snare" in kind:
        # White noise mixed with a tone.
        length = SAMPLE_RATE // 8
        samples = []
        for i in range(length):
            tone = math.sin(2.0 * PI * 400.0 * i / SAMPLE_RATE) * 0.3
            decay = 1.0 - i / length
            samples.append((_noise(rng) * 0.7 + tone * 0.3) * decay * MAX_AMPLITUDE)
        return samples
    if "hihat" in kind or "clap" in kind:
        # Short burst of white noise.
        length = SAMPLE_RATE // 16
        return [_noise(rng) * (1.0 - i / length) * MAX_AMPLITUDE for i in range(length)]
    length = SAMPLE_RATE // 10
    return [
        math.sin(2.0 * PI * 220.0 * i / SAMPLE_RATE) * MAX_AMPLITUDE * 0.5
        for i in range(length)
    ]


class Sound:
    """Mono sample data with a playback cursor."""

    def __init__(self, kind: str, rng: random.Random | None = None) -> None:
        self.kind = kind
        self.data: list[float] = _synthesise(kind, rng or random.Random())
        self.position = 0

    def __len__(self) -> int:
        return len(self.data)

    @property
    def finished(self) -> bool:
        return self.position >= len(self.data)

    def read(self, num_samples: int, velocity: float, pan: float, pitch: float) -> list[float]:
        """Return the next ``num_samples`` samples scaled by velocity, padded with silence.

        Pan and pitch are accepted but not applied: the output is mono and unshifted.
        """
        if num_samples < 0:
            raise ValueError(f"negative sample count: {num_samples}")
        chunk = self.data[self.position:self.position + num_samples]
        self.position += len(chunk)
        out = [sample * velocity for sample in chunk]
        out.extend([0.0] * (num_samples - len(out)))
        return out

    def reset_playback(self) -> None:
        self.position = 0


@dataclass
class Instrument:
    """A named sound source; its sound is synthesised from its id."""

    id: str
    name: str
    path: str
    default_volume: float = 1.0
    default_pan: float = 0.0
    default_pitch: float = 0.0
    sound: Sound = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.sound = Sound(self.id)
        log.debug("Instrument '%s' (%s) créé.", self.name, self.id)

    def render(self, num_samples: int, velocity: float, pan: float, pitch: float) -> list[float]:
        return self.sound.read(num_samples, velocity, pan, pitch)

    def reset_playback(self) -> None:
        self.sound.reset_playback()


@dataclass
class Event:
    """An instrument hit at a given sequencer step."""

    instrument: Instrument | None
    step: int
    velocity: float = 1.0
    pan: float = 0.0
    pitch: float = 0.0