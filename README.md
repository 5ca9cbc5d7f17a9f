# adikplan

A drum machine that runs entirely in software. It has instruments with
synthesised test sounds, four-track step sequences, an eight-channel mixer,
songs built by chaining sequences, and a transport with play, pause, stop,
seek, rewind and forward. Playback is simulated: the sequencer fills audio
buffers in memory and logs each step as it fires.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
adikplan
```

This runs a demonstration. It first plays the two demo sequences in
sequence mode: "Intro Groove (2 Mesures)" and "Chorus Beat (1 Mesure)".
Next it shows pause, seeking, rewind and forward. Last, it builds a song from
those sequences and plays it in song mode, muting a track and deleting a
sequence along the way. Transport reports and step-by-step activity are
printed to standard output, in French.

Options:

- `--realtime`: after each buffer, wait for the time that buffer lasts, as a
  sound card would. Without it the demonstration runs as fast as it can.
- `-q`, `--quiet`: show only the demonstration headers and the transport
  reports, and hide the per-step log.

## Library use

```python
from adikplan.player import Player, PlaybackMode
from adikplan.transport import Transport

player = Player()                      # 120 BPM, 44100 Hz, 512-sample buffers
transport = Transport(player)

player.set_playback_mode(PlaybackMode.SEQUENCE)
player.select_sequence_in_player(0)
transport.play()
samples = player.simulate_playback(2, realtime=False)   # list of floats
transport.stop()

player.set_playback_mode(PlaybackMode.SONG)
player.clear_song()
player.add_sequence_to_song(0, 1)
player.add_sequence_to_song(1, 2)
transport.set_position(20)             # absolute step within the song
info = transport.print_info()          # prints and returns a TransportInfo
```

### Modules

- `adikplan.sound`
  - `Sound` generates a short mono signal from its kind. A kind containing
    "kick" gives a decaying 100 Hz sine. "snare" gives noise mixed with a tone.
    "hihat" or "clap" gives a burst of noise. Any other kind gives a 220 Hz
    sine.
  - `Sound.read(num_samples, velocity, pan, pitch)` returns the next samples
    scaled by velocity and padded with silence. It accepts pan and pitch but
    does not apply them.
  - `Instrument` is a dataclass whose sound is synthesised from its `id`.
  - `Event` is a dataclass for one instrument hit at a given step.
- `adikplan.mixer`
  - `Channel` plays its routed instrument for one buffer and then goes
    inactive.
  - `Mixer` has eight channels (`NUM_CHANNELS`) and a master volume of 0.7 by
    default. `route_sound` takes a 1-based channel index and raises
    `ValueError` for an index outside 1 to 8. `mix` sums the active channels
    and scales the result by the master volume.
- `adikplan.sequence`
  - `Track` is a list of events routed to one mixer channel, with volume,
    mute and solo.
  - `Sequence` has four tracks by default. `length_in_steps` is the number of
    measures times the steps per measure. `track(index)` raises `IndexError`
    for an index that is out of range.
- `adikplan.song`
  - `Song` is an ordered list of sequences, and the same sequence object may
    appear more than once.
  - `total_steps()` and `total_measures()` give the song's totals.
    `absolute_step(sequence_index, step)` turns a position into a step counted
    from the start of the song. `locate(absolute_step)` maps it back to
    `(sequence_index, step_in_sequence)`, clamped to the song.
- `adikplan.player`
  - `Player` holds five default instruments, sixteen sequence slots
    (`NUM_SEQS`) with the first two filled with demo beats, a current song and
    a mixer.
  - `PlaybackMode.SEQUENCE` plays the selected slot. `PlaybackMode.SONG` plays
    the song's sequences in turn and loops back to the start.
  - `process_audio(num_samples)` advances the sequencer sample by sample and
    returns the mixed buffer.
  - `advance_step(sequence)` fires the events at the current step, taking mute
    and solo into account, and returns them.
  - Muted tracks are skipped. If any track is soloed, only soloed tracks play.
- `adikplan.transport`
  - `Transport` provides `play`, `pause`, `stop`, `set_position`, `rewind`,
    `forward`, `info` and `print_info`.
  - `info()` returns a frozen `TransportInfo` with a `TransportState`
    (stopped, playing or paused), the item name, the absolute step, the
    measure, the step within the measure, the totals and the progress through
    the current step.
- `adikplan.cli`
  - `main(argv=None)` runs the demonstration.

### Errors

Invalid indices raise `IndexError`. Looking up an unknown instrument with
`Player.get_instrument` raises `KeyError`. Starting song mode with an empty
song raises `RuntimeError`, and so does calling `Transport.set_position` when
there is no sequence to play. `Song.add_sequence(None)` raises `ValueError`.

### Logging

Activity is logged through the `adikplan` logger, which has no handler
configured by default. The command line attaches a handler that writes to
standard output.

## What it does not do

- It produces no sound. Buffers are returned as lists of floats and never
  sent to an audio device.
- It does not load audio files. An instrument's `path` is stored but not
  read; every sound is synthesised.
- It cannot save or load sequences or songs.
- Output is mono, and pan and pitch have no effect on the samples.