"""Command-line demonstration of the drum machine sequencer and its transport."""

from __future__ import annotations

import argparse
import logging
import sys

from adikplan.player import PlaybackMode, Player
from adikplan.transport import Transport


def _print_song(player: Player) -> None:
    for index, sequence in enumerate(player.current_song.sequences):
        print(f"  Index {index}: {sequence.name} (Longueur: {sequence.length_in_steps} pas)")


def _run_demo(realtime: bool) -> None:
    player = Player()
    transport = Transport(player)

    def play_for(seconds: int) -> None:
        transport.play()
        player.simulate_playback(seconds, realtime)
        transport.stop()

    print("\n========== MODE SÉQUENCE (TEMPS RÉEL SIMULÉ) ==========")
    player.set_playback_mode(PlaybackMode.SEQUENCE)
    player.select_sequence_in_player(0)
    transport.print_info()
    print("\n--- Simulation en temps réel de la Séquence 'Intro Groove' (Player Index 0) ---")
    play_for(5)
    transport.print_info()

    print("\n--- Réduction du volume du Charley Fermé sur Séquence 0 du Player et relecture en temps réel ---")
    player.sequences[0].track(2).volume = 0.2
    play_for(5)

    player.select_sequence_in_player(1)
    transport.print_info()
    print("\n--- Simulation en temps réel de la Séquence 'Chorus Beat' (Player Index 1) ---")
    play_for(3)

    print("\n\n========== DÉMONSTRATION DES FONCTIONS DE TRANSPORT ==========")
    player.set_playback_mode(PlaybackMode.SEQUENCE)
    player.select_sequence_in_player(0)

    print("\n--- Test de Pause ---")
    transport.play()
    player.simulate_playback(2, realtime)
    transport.pause()
    transport.print_info()
    player.simulate_playback(1, realtime)
    transport.play()
    player.simulate_playback(2, realtime)
    transport.stop()
    transport.print_info()

    print("\n--- Test de setPosition ---")
    transport.set_position(8)
    transport.print_info()
    play_for(3)

    print("\n--- Test de Rewind et Forward ---")
    transport.set_position(10)
    transport.print_info()
    transport.rewind()
    transport.print_info()
    transport.forward(5)
    transport.print_info()
    play_for(3)

    print("\n\n========== MODE SONG (TEMPS RÉEL SIMULÉ) AVEC TRANSPORT ==========")
    player.set_playback_mode(PlaybackMode.SONG)
    player.clear_song()
    song = player.current_song
    song.name = "Mon Morceau Final (Demo Temps Reel)"

    player.add_sequence_to_song(0)
    player.add_sequence_to_song(1, 2)
    player.add_sequence_to_song(0)

    print(f"\nSéquences dans le morceau '{song.name}':")
    _print_song(player)
    transport.print_info()

    print(f"\n--- Lecture en temps réel simulée du Morceau '{song.name}' ---")
    play_for(15)
    transport.print_info()

    print("\n--- Mute de la caisse claire dans la PREMIERE séquence du morceau et relecture en temps réel ---")
    if song.sequences:
        song.sequences[0].track(1).muted = True
        print(f"Muting snare track on sequence '{song.sequences[0].name}'")
    play_for(10)

    print("\n--- Suppression de la séquence à l'index 1 du morceau et relecture en temps réel ---")
    player.delete_sequence_from_song(1)
    transport.print_info()
    print(f"\nSéquences restantes dans le morceau '{song.name}':")
    _print_song(player)
    play_for(10)


def main(argv: list[str] | None = None) -> int:
    """Run the sequencer demonstration."""
    parser = argparse.ArgumentParser(
        prog="adikplan",
        description="Démonstration du séquenceur de boîte à rythmes et de son transport.",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="wait one buffer's duration after each buffer, as a sound card would",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="show only the demonstration headers and transport reports",
    )
    args = parser.parse_args(argv)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("adikplan")
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.WARNING if args.quiet else logging.INFO)
    try:
        _run_demo(args.realtime)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())