"""A song: an ordered chain of sequences with absolute step arithmetic."""

from __future__ import annotations

import logging

from adikplan.sequence import Sequence

log = logging.getLogger(__name__)


class Song:
    """Sequences played one after another; the same sequence may appear many times."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.sequences: list[Sequence] = []
        log.info("Morceau '%s' créé.", name)

    def add_sequence(self, sequence: Sequence | None, times: int = 1) -> None:
        """Append ``sequence`` ``times`` times; the entries share the same object."""
        if sequence is None:
            raise ValueError("Tentative d'ajouter une séquence nulle au morceau.")
        for _ in range(times):
            self.sequences.append(sequence)
            log.info("Séquence '%s' ajoutée au morceau '%s'.", sequence.name, self.name)

    def delete_sequence(self, index: int) -> Sequence:
        """Remove and return the sequence at ``index``."""
        if not 0 <= index < len(self.sequences):
            raise IndexError(f"Indice de séquence invalide pour la suppression: {index}")
        removed = self.sequences.pop(index)
        log.info("Séquence '%s' supprimée du morceau '%s'.", removed.name, self.name)
        return removed

    def clear(self) -> None:
        self.sequences.clear()
        log.info("Morceau '%s' vidé de ses séquences.", self.name)

    def total_steps(self) -> int:
        return sum(seq.length_in_steps for seq in self.sequences)

    def total_measures(self) -> int:
        return sum(seq.number_of_measures for seq in self.sequences)

    def absolute_step(self, sequence_index: int, step_in_sequence: int) -> int:
        """Convert a (sequence index, step) pair to a step counted from the song start."""
        if not 0 <= sequence_index < len(self.sequences):
            raise IndexError(f"Indice de séquence invalide: {sequence_index}")
        offset = sum(seq.length_in_steps for seq in self.sequences[:sequence_index])
        return offset + step_in_sequence

    def locate(self, absolute_step: int) -> tuple[int, int]:
        """Map an absolute song step to ``(sequence_index, step_in_sequence)``.

        The step is clamped to the song; an empty song maps everything to ``(0, 0)``.
        """
        total = self.total_steps()
        if total == 0:
            return 0, 0
        absolute_step = max(0, min(absolute_step, total - 1))
        start = 0
        for index, seq in enumerate(self.sequences):
            if start <= absolute_step < start + seq.length_in_steps:
                return index, absolute_step - start
            start += seq.length_in_steps
        last = len(self.sequences) - 1
        return last, self.sequences[last].length_in_steps - 1