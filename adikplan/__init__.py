"""A simulated step-sequencer drum machine: sounds, mixer, sequences, songs, player and transport."""

__version__ = "0.1.0"