"""The drum machine engine: instruments, sequences, the current song and playback."""

from __future__ import annotations

import logging
import time
from enum import Enum

from adikplan.mixer import Mixer
from adikplan.sequence import Sequence
from adikplan.song import Song
from adikplan.sound import Event, Instrument

log = logging.getLogger(__name__)

NUM_SEQS = 16

_DEFAULT_INSTRUMENTS = (
    ("kick_1", "Grosse Caisse", "path/to/kick.wav"),
    ("snare_1", "Caisse Claire", "path/to/snare.wav"),
    ("hihat_closed_1", "Charley Fermé", "path/to/hihat_closed.wav"),
    ("hihat_open_1", "Charley Ouvert", "path/to/hihat_open.wav"),
    ("clap_1", "Clap", "path/to/clap.wav"),
)


class PlaybackMode(Enum):
    """Play one selected sequence, or the chain of sequences of the current song."""

    SEQUENCE = "SEQUENCE_MODE"
    SONG = "SONG_MODE"


class Player:
    """Owns the instruments, the sixteen pattern slots, the song and the mixer."""

    NUM_SEQS = NUM_SEQS

    def __init__(
        self,
        tempo_bpm: int = 120,
        sample_rate: int = 44100,
        buffer_size: int = 512,
    ) -> None:
        self.tempo_bpm = tempo_bpm
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self.samples_per_beat = 0.0
        self.samples_per_step = 0.0

        self.current_step = 0
        self.current_sample_in_step = 0
        self.is_playing = False

        self.mode = PlaybackMode.SEQUENCE
        self.selected_sequence_index = 0
        self.song_sequence_index = 0

        self.mixer = Mixer()
        self.instruments: dict[str, Instrument] = {}

        self.calculate_timing()

        for instrument_id, name, path in _DEFAULT_INSTRUMENTS:
            self.add_instrument(Instrument(instrument_id, name, path))

        self.sequences: list[Sequence] = [
            Sequence(f"Sequence {i}", 1, 16) for i in range(1, NUM_SEQS + 1)
        ]
        self.current_song = Song("Mon Nouveau Morceau")

        self.populate_demo_sequence(
            self.sequences[0], "Intro Groove (2 Mesures)",
            "kick_1", "snare_1", "hihat_closed_1", "hihat_open_1", 2, 16,
        )
        self.populate_demo_sequence(
            self.sequences[1], "Chorus Beat (1 Mesure)",
            "kick_1", "snare_1", "hihat_closed_1", "clap_1", 1, 16,
        )

    def calculate_timing(self) -> None:
        """Derive samples per beat and per step (a sixteenth note) from tempo and rate."""
        self.samples_per_beat = self.sample_rate * 60.0 / self.tempo_bpm
        self.samples_per_step = self.samples_per_beat / 4.0
        log.info(
            "Timing: Samples par battement = %g, Samples par pas = %g",
            self.samples_per_beat,
            self.samples_per_step,
        )

    def populate_demo_sequence(
        self,
        sequence: Sequence,
        name: str,
        kick_id: str,
        snare_id: str,
        hihat_closed_id: str,
        additional_id: str,
        num_measures: int,
        steps_per_measure: int,
    ) -> None:
        """Fill ``sequence`` with a basic four-track beat over ``num_measures`` measures."""
        spm = steps_per_measure
        sequence.name = name
        sequence.steps_per_measure = spm
        sequence.number_of_measures = num_measures
        sequence.length_in_steps = num_measures * spm
        for track in sequence.tracks:
            track.events.clear()

        kick = sequence.track(0)
        kick.name = "Kick"
        kick.mixer_channel_index = 1
        for m in range(num_measures):
            kick.add_event(self.get_instrument(kick_id), m * spm)
            kick.add_event(self.get_instrument(kick_id), m * spm + 8)

        snare = sequence.track(1)
        snare.name = "Snare"
        snare.mixer_channel_index = 2
        for m in range(num_measures):
            snare.add_event(self.get_instrument(snare_id), m * spm + 4)
            snare.add_event(self.get_instrument(snare_id), m * spm + 12)

        hihat = sequence.track(2)
        hihat.name = "Hi-Hat Fermé"
        hihat.mixer_channel_index = 3
        for m in range(num_measures):
            for i in range(spm):
                hihat.add_event(self.get_instrument(hihat_closed_id), m * spm + i, 0.7)
        hihat.volume = 0.8

        additional = sequence.track(3)
        additional.name = "Additional Sound"
        additional.mixer_channel_index = 4
        for m in range(num_measures):
            additional.add_event(self.get_instrument(additional_id), m * spm + spm - 1, 0.9)

    def add_instrument(self, instrument: Instrument) -> None:
        self.instruments[instrument.id] = instrument

    def get_instrument(self, instrument_id: str) -> Instrument:
        try:
            return self.instruments[instrument_id]
        except KeyError:
            raise KeyError(f"Instrument avec l'ID '{instrument_id}' non trouvé.") from None

    def _reset_position(self) -> None:
        self.current_step = 0
        self.current_sample_in_step = 0

    def set_playback_mode(self, mode: PlaybackMode) -> None:
        """Switch mode and rewind to the very beginning."""
        self.mode = PlaybackMode(mode)
        log.info("Mode de lecture défini sur: %s", self.mode.value)
        self._reset_position()
        self.song_sequence_index = 0

    def select_sequence_in_player(self, index: int) -> None:
        if not 0 <= index < len(self.sequences):
            raise IndexError(f"Indice de séquence invalide dans le Player ({index}).")
        self.selected_sequence_index = index
        self._reset_position()
        seq = self.sequences[index]
        log.info(
            "Séquence sélectionnée dans le Player: %s (Longueur: %d mesures, %d pas)",
            seq.name, seq.number_of_measures, seq.length_in_steps,
        )

    def select_sequence_in_song(self, index: int) -> None:
        if not 0 <= index < len(self.current_song.sequences):
            raise IndexError(f"Indice de séquence invalide dans le Morceau ({index}).")
        self.song_sequence_index = index
        self._reset_position()
        log.info("Séquence sélectionnée dans le Morceau: %s", self.current_song.sequences[index].name)

    def add_sequence_to_song(self, index: int, times: int = 1) -> None:
        """Append the player's sequence slot ``index`` to the song, shared, ``times`` times."""
        if not 0 <= index < len(self.sequences):
            raise IndexError(f"Indice de séquence du Player invalide ({index}).")
        self.current_song.add_sequence(self.sequences[index], times)

    def delete_sequence_from_song(self, index: int) -> Sequence:
        return self.current_song.delete_sequence(index)

    def clear_song(self) -> None:
        self.current_song.clear()

    def start(self) -> None:
        """Begin playing from the current position."""
        if self.mode is PlaybackMode.SONG and not self.current_song.sequences:
            raise RuntimeError("Aucun morceau ou séquence dans le morceau à jouer en mode SONG.")
        self.is_playing = True
        log.info("Lecture démarrée (interne).")

    def stop(self) -> None:
        """Stop playing; the position is left where it is."""
        self.is_playing = False
        log.info("Lecture arrêtée (interne).")

    def current_sequence(self) -> Sequence | None:
        """Return the sequence the current mode would play, if any."""
        if self.mode is PlaybackMode.SEQUENCE:
            if 0 <= self.selected_sequence_index < len(self.sequences):
                return self.sequences[self.selected_sequence_index]
            return None
        if 0 <= self.song_sequence_index < len(self.current_song.sequences):
            return self.current_song.sequences[self.song_sequence_index]
        return None

    def advance_step(self, sequence: Sequence | None) -> list[Event]:
        """Fire the events at the current step of ``sequence``, then move one step on.

        Returns the events routed to the mixer.
        """
        if sequence is None:
            return []

        measure, step_in_measure = divmod(self.current_step, sequence.steps_per_measure)
        any_solo = any(track.soloed for track in sequence.tracks)

        fired: list[Event] = []
        for track in sequence.tracks:
            if track.muted or (any_solo and not track.soloed):
                continue
            for event in track.events_at(self.current_step):
                if event.instrument is None:
                    continue
                try:
                    self.mixer.route_sound(
                        track.mixer_channel_index,
                        event.instrument,
                        event.velocity * track.volume,
                        event.pan,
                        event.pitch,
                    )
                except ValueError as exc:
                    log.error("%s", exc)
                    continue
                fired.append(event)

        log.info(
            "Mode: %s | Séquence: %s | Mesure: %d | Pas: %d (Abs: %d) | Événements: %s",
            "SEQUENCE" if self.mode is PlaybackMode.SEQUENCE else "SONG",
            sequence.name,
            measure + 1,
            step_in_measure,
            self.current_step,
            ", ".join(e.instrument.name for e in fired) if fired else "Rien.",
        )
        log.info("%s", self.mixer.status())

        self.current_step += 1
        if self.current_step >= sequence.length_in_steps:
            self.current_step = 0
            if self.mode is PlaybackMode.SONG:
                self.song_sequence_index += 1
                if self.song_sequence_index >= len(self.current_song.sequences):
                    self.song_sequence_index = 0
                    log.info("--- Morceau bouclé ---")
        return fired

    def process_audio(self, num_samples: int) -> list[float]:
        """Produce one output buffer, advancing the sequencer sample by sample."""
        if not self.is_playing:
            return [0.0] * num_samples
        sequence = self.current_sequence()
        if sequence is None:
            return [0.0] * num_samples

        for _ in range(num_samples):
            if self.current_sample_in_step >= self.samples_per_step:
                self.advance_step(sequence)
                self.current_sample_in_step = 0
            self.current_sample_in_step += 1

        return self.mixer.mix(num_samples)

    def simulate_playback(self, seconds: int, realtime: bool = False) -> list[float]:
        """Run the audio callback for ``seconds`` of audio and return all samples produced.

        With ``realtime`` the loop sleeps one buffer's duration after each buffer.
        """
        self.start()
        total = seconds * self.sample_rate
        output: list[float] = []
        try:
            processed = 0
            while processed < total:
                output.extend(self.process_audio(self.buffer_size))
                processed += self.buffer_size
                if realtime:
                    time.sleep(self.buffer_size / self.sample_rate)
        finally:
            self.stop()
        return output