"""Mixer channels that play instruments one-shot and sum them to a buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from adikplan.sound import Instrument

log = logging.getLogger(__name__)


@dataclass
class Channel:
    """One mixer channel holding the instrument currently routed to it."""

    id: int
    instrument: Instrument | None = None
    velocity: float = 0.0
    pan: float = 0.0
    pitch: float = 0.0
    active: bool = False

    def receive_sound(self, instrument: Instrument | None, velocity: float, pan: float, pitch: float) -> None:
        """Route a hit to this channel and restart the instrument's playback."""
        self.instrument = instrument
        self.velocity = velocity
        self.pan = pan
        self.pitch = pitch
        self.active = True
        if instrument is not None:
            instrument.reset_playback()

    def clear(self) -> None:
        self.active = False
        self.instrument = None
        self.velocity = 0.0
        self.pan = 0.0
        self.pitch = 0.0

    def status(self) -> str:
        text = f"Canal {self.id}: {'ACTIF' if self.active else 'Inactif'}"
        if self.instrument is not None:
            text += f" - Instrument: {self.instrument.name}"
        return text

    def render(self, num_samples: int) -> list[float]:
        """Render one buffer of this channel, then deactivate it (one-shot)."""
        if self.active and self.instrument is not None:
            out = self.instrument.render(num_samples, self.velocity, self.pan, self.pitch)
            self.active = False
            return out
        return [0.0] * num_samples


class Mixer:
    """A fixed bank of channels summed and scaled by a master volume."""

    NUM_CHANNELS = 8

    def __init__(self, master_volume: float = 0.7) -> None:
        self.master_volume = master_volume
        self.channels = [Channel(i) for i in range(1, self.NUM_CHANNELS + 1)]
        log.debug("Mixer initialisé avec %d canaux.", self.NUM_CHANNELS)

    def route_sound(
        self,
        channel_index: int,
        instrument: Instrument | None,
        velocity: float,
        pan: float,
        pitch: float,
    ) -> None:
        """Send a hit to the channel with the given 1-based index."""
        if not 0 < channel_index <= self.NUM_CHANNELS:
            raise ValueError(f"Canal mixeur invalide: {channel_index}")
        self.channels[channel_index - 1].receive_sound(instrument, velocity, pan, pitch)

    def status(self) -> str:
        marks = "".join("X" if channel.active else "." for channel in self.channels)
        return f"Mixer Status (Master Vol: {self.master_volume:g}): [{marks}]"

    def clear_all(self) -> None:
        for channel in self.channels:
            channel.clear()

    def mix(self, num_samples: int) -> list[float]:
        """Sum every active channel into one buffer and apply the master volume."""
        output = [0.0] * num_samples
        for channel in self.channels:
            if channel.active:
                rendered = channel.render(num_samples)
                output = [a + b for a, b in zip(output, rendered)]
        return [sample * self.master_volume for sample in output]