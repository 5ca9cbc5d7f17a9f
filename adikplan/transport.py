"""Transport controls (play, pause, stop, locate) and a status report for a player."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from adikplan.player import PlaybackMode, Player

log = logging.getLogger(__name__)


class TransportState(Enum):
    """What the player is doing, as seen from the transport."""

    STOPPED = "Arrêté"
    PLAYING = "En Lecture"
    PAUSED = "En Pause"


@dataclass(frozen=True)
class TransportInfo:
    """A snapshot of the transport; steps and measures are 0-based."""

    state: TransportState
    tempo_bpm: int
    mode: PlaybackMode
    item_name: str
    absolute_step: int
    total_steps: int
    total_measures: int
    measure: int
    step_in_measure: int
    progress: float

    def __str__(self) -> str:
        mode_label = "SÉQUENCE" if self.mode is PlaybackMode.SEQUENCE else "MORCEAU"
        return "\n".join(
            [
                "",
                "--- État du Transport ---",
                f"État du Player : {self.state.value}",
                f"Tempo : {self.tempo_bpm} BPM",
                f"Mode : {mode_label}",
                f"Élément en cours : {self.item_name}",
                f"Pas courant (Absolu) : {self.absolute_step + 1} / {self.total_steps}",
                f"Mesure courante : {self.measure + 1}",
                f"Pas dans la mesure : {self.step_in_measure + 1}",
                f"Progression dans le pas : {self.progress:.2f}%",
                "-------------------------",
            ]
        )


class Transport:
    """Drives a player's position and play state."""

    def __init__(self, player: Player) -> None:
        if player is None:
            raise ValueError("Transport requires a player.")
        self.player = player
        log.info("AdikTransport initialisé.")

    def play(self) -> None:
        """Start playing from the current position."""
        self.player.start()
        log.info("[TRANSPORT] Lecture démarrée.")

    def pause(self) -> bool:
        """Pause at the current step; return False if the player was not playing."""
        if not self.player.is_playing:
            log.warning("[TRANSPORT] Le lecteur n'est pas en lecture, impossible de mettre en pause.")
            return False
        self.player.is_playing = False
        log.info("[TRANSPORT] Lecture en pause au pas %d.", self.player.current_step)
        return True

    def stop(self) -> None:
        """Stop playing and return to the beginning."""
        player = self.player
        player.stop()
        player.current_step = 0
        player.current_sample_in_step = 0
        if player.mode is PlaybackMode.SONG:
            player.song_sequence_index = 0
        log.info("[TRANSPORT] Lecture arrêtée et réinitialisée.")

    def set_position(self, step: int) -> int:
        """Move to ``step``, clamped to the sequence or song; return the step used.

        In song mode ``step`` counts from the start of the song.
        """
        player = self.player
        sequence = player.current_sequence()
        if sequence is None:
            raise RuntimeError("Aucune séquence ou morceau actif pour définir la position.")

        if player.mode is PlaybackMode.SEQUENCE:
            max_steps = sequence.length_in_steps
        else:
            max_steps = player.current_song.total_steps()
        target = max(0, min(step, max_steps - 1))

        if player.mode is PlaybackMode.SONG:
            player.song_sequence_index, player.current_step = player.current_song.locate(target)
        else:
            player.current_step = target
        player.current_sample_in_step = 0
        log.info("[TRANSPORT] Position définie au pas %d.", target)
        return target

    def _absolute_position(self) -> int:
        player = self.player
        song = player.current_song
        if player.mode is PlaybackMode.SONG and 0 <= player.song_sequence_index < len(song.sequences):
            return song.absolute_step(player.song_sequence_index, player.current_step)
        return player.current_step

    def rewind(self, steps: int = 1) -> int:
        """Move back ``steps`` steps; return the new absolute step."""
        target = self.set_position(self._absolute_position() - steps)
        log.info("[TRANSPORT] Reculé de %d pas.", steps)
        return target

    def forward(self, steps: int = 1) -> int:
        """Move forward ``steps`` steps; return the new absolute step."""
        target = self.set_position(self._absolute_position() + steps)
        log.info("[TRANSPORT] Avancé de %d pas.", steps)
        return target

    def info(self) -> TransportInfo:
        """Describe the current item, position and play state."""
        player = self.player

        if player.is_playing:
            state = TransportState.PLAYING
        elif player.current_sample_in_step > 0 or player.current_step > 0:
            state = TransportState.PAUSED
        else:
            state = TransportState.STOPPED

        item_name = "N/A"
        absolute_step = player.current_step
        measure = step_in_measure = total_steps = total_measures = 0

        if player.mode is PlaybackMode.SEQUENCE:
            if 0 <= player.selected_sequence_index < len(player.sequences):
                sequence = player.sequences[player.selected_sequence_index]
                item_name = sequence.name
                total_steps = sequence.length_in_steps
                total_measures = sequence.number_of_measures
                measure, step_in_measure = divmod(absolute_step, sequence.steps_per_measure)
        else:
            song = player.current_song
            if 0 <= player.song_sequence_index < len(song.sequences):
                sequence = song.sequences[player.song_sequence_index]
                item_name = f"{song.name} (Séquence courante: {sequence.name})"
                total_steps = song.total_steps()
                total_measures = song.total_measures()
                absolute_step = song.absolute_step(player.song_sequence_index, player.current_step)
                measure, step_in_measure = divmod(absolute_step, sequence.steps_per_measure)
            else:
                item_name = f"{song.name} (Pas de séquence active)"

        progress = player.current_sample_in_step / player.samples_per_step * 100.0
        return TransportInfo(
            state=state,
            tempo_bpm=player.tempo_bpm,
            mode=player.mode,
            item_name=item_name,
            absolute_step=absolute_step,
            total_steps=total_steps,
            total_measures=total_measures,
            measure=measure,
            step_in_measure=step_in_measure,
            progress=progress,
        )

    def print_info(self) -> TransportInfo:
        """Print the transport report to standard output and return the snapshot shown."""
        snapshot = self.info()
        print(snapshot)
        return snapshot