"""Tracks of step events and the sequences that group them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from adikplan.sound import Event, Instrument

log = logging.getLogger(__name__)

DEFAULT_TRACK_COUNT = 4


@dataclass
class Track:
    """A list of events routed to one mixer channel (1-based index)."""

    name: str
    mixer_channel_index: int
    events: list[Event] = field(default_factory=list)
    volume: float = 1.0
    muted: bool = False
    soloed: bool = False

    def add_event(
        self,
        instrument: Instrument | None,
        step: int,
        velocity: float = 1.0,
        pan: float = 0.0,
        pitch: float = 0.0,
    ) -> Event:
        """Append a hit of ``instrument`` at ``step`` and return the new event."""
        event = Event(instrument, step, velocity, pan, pitch)
        self.events.append(event)
        return event

    def events_at(self, step: int) -> list[Event]:
        """Return the events that fire at ``step``, in insertion order."""
        return [event for event in self.events if event.step == step]


@dataclass
class Sequence:
    """A pattern of tracks spanning a number of measures."""

    name: str
    number_of_measures: int
    steps_per_measure: int
    tracks: list[Track] = field(default_factory=list)
    length_in_steps: int = field(init=False)

    def __post_init__(self) -> None:
        self.length_in_steps = self.number_of_measures * self.steps_per_measure
        if not self.tracks:
            self.tracks = [
                Track(f"Track {channel}", channel)
                for channel in range(1, DEFAULT_TRACK_COUNT + 1)
            ]
        log.info(
            "Séquence '%s' créée (%d mesures, %d pas/mesure, %d pas total).",
            self.name,
            self.number_of_measures,
            self.steps_per_measure,
            self.length_in_steps,
        )

    def track(self, index: int) -> Track:
        """Return the track at ``index``; negative or too large indices are rejected."""
        if not 0 <= index < len(self.tracks):
            raise IndexError(f"Indice de piste invalide: {index}")
        return self.tracks[index]