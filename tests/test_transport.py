import pytest

from adikplan.player import PlaybackMode, Player
from adikplan.transport import Transport, TransportState


@pytest.fixture
def player():
    return Player()


@pytest.fixture
def transport(player):
    return Transport(player)


def _song_of_two(player):
    player.set_playback_mode(PlaybackMode.SONG)
    player.add_sequence_to_song(0)
    player.add_sequence_to_song(1)
    return player.current_song


def test_requires_player():
    with pytest.raises(ValueError):
        Transport(None)


def test_play_starts_player(player, transport):
    transport.play()
    assert player.is_playing is True


def test_play_in_empty_song_raises(player, transport):
    player.set_playback_mode(PlaybackMode.SONG)
    with pytest.raises(RuntimeError):
        transport.play()
    assert player.is_playing is False


def test_pause_keeps_position(player, transport):
    transport.set_position(5)
    transport.play()
    assert transport.pause() is True
    assert player.is_playing is False
    assert player.current_step == 5
    assert transport.info().state is TransportState.PAUSED


def test_pause_when_not_playing(player, transport):
    assert transport.pause() is False
    assert player.is_playing is False


def test_stop_resets_sequence_position(player, transport):
    transport.set_position(7)
    player.current_sample_in_step = 42
    transport.play()
    transport.stop()
    assert player.is_playing is False
    assert (player.current_step, player.current_sample_in_step) == (0, 0)
    assert transport.info().state is TransportState.STOPPED


def test_stop_resets_song_index(player, transport):
    song = _song_of_two(player)
    transport.set_position(song.sequences[0].length_in_steps + 2)
    assert player.song_sequence_index == 1
    transport.stop()
    assert player.song_sequence_index == 0
    assert player.current_step == 0


def test_set_position_clamps_in_sequence(player, transport):
    sequence = player.sequences[0]
    assert transport.set_position(10_000) == sequence.length_in_steps - 1
    assert player.current_step == sequence.length_in_steps - 1
    assert transport.set_position(-3) == 0
    assert player.current_step == 0


def test_set_position_resets_sample(player, transport):
    player.current_sample_in_step = 100
    transport.set_position(3)
    assert player.current_sample_in_step == 0


def test_set_position_in_song(player, transport):
    song = _song_of_two(player)
    transport.set_position(song.sequences[0].length_in_steps + 3)
    assert (player.song_sequence_index, player.current_step) == (1, 3)


def test_set_position_clamps_to_song_end(player, transport):
    song = _song_of_two(player)
    assert transport.set_position(10**6) == song.total_steps() - 1
    assert player.song_sequence_index == len(song.sequences) - 1
    assert player.current_step == song.sequences[-1].length_in_steps - 1


def test_set_position_without_sequence_raises(player, transport):
    player.set_playback_mode(PlaybackMode.SONG)
    with pytest.raises(RuntimeError):
        transport.set_position(0)


def test_rewind_and_forward_in_sequence(player, transport):
    transport.set_position(10)
    assert transport.rewind() == 9
    assert player.current_step == 9
    assert transport.forward(5) == 14
    assert player.current_step == 14


def test_rewind_clamps_at_zero(player, transport):
    transport.set_position(2)
    assert transport.rewind(10) == 0
    assert player.current_step == 0


def test_forward_crosses_song_boundary(player, transport):
    song = _song_of_two(player)
    first = song.sequences[0].length_in_steps
    transport.set_position(first - 2)
    assert transport.forward(5) == first + 3
    assert (player.song_sequence_index, player.current_step) == (1, 3)


def test_rewind_crosses_song_boundary(player, transport):
    song = _song_of_two(player)
    first = song.sequences[0].length_in_steps
    transport.set_position(first + 1)
    transport.rewind(3)
    assert (player.song_sequence_index, player.current_step) == (0, first - 2)


def test_info_sequence_mode(player, transport):
    sequence = player.sequences[0]
    info = transport.info()
    assert info.mode is PlaybackMode.SEQUENCE
    assert info.item_name == sequence.name
    assert info.total_steps == sequence.length_in_steps
    assert info.total_measures == sequence.number_of_measures
    assert info.state is TransportState.STOPPED
    assert info.tempo_bpm == player.tempo_bpm


def test_info_measure_and_step(player, transport):
    sequence = player.sequences[0]
    transport.set_position(sequence.steps_per_measure + 3)
    info = transport.info()
    assert (info.measure, info.step_in_measure) == (1, 3)
    assert info.absolute_step == sequence.steps_per_measure + 3


def test_info_progress(player, transport):
    player.samples_per_step = 1000.0
    player.current_sample_in_step = 250
    assert transport.info().progress == pytest.approx(25.0)


def test_info_song_mode(player, transport):
    song = _song_of_two(player)
    transport.set_position(song.sequences[0].length_in_steps + 1)
    info = transport.info()
    assert info.mode is PlaybackMode.SONG
    assert info.total_steps == song.total_steps()
    assert info.total_measures == song.total_measures()
    assert info.absolute_step == song.sequences[0].length_in_steps + 1
    assert info.item_name.startswith(song.name)
    assert song.sequences[1].name in info.item_name


def test_info_song_without_sequences(player, transport):
    player.set_playback_mode(PlaybackMode.SONG)
    info = transport.info()
    assert info.item_name == f"{player.current_song.name} (Pas de séquence active)"
    assert info.total_steps == 0


def test_print_info(player, transport, capsys):
    sequence = player.sequences[0]
    transport.print_info()
    out = capsys.readouterr().out
    assert "--- État du Transport ---" in out
    assert f"Tempo : {player.tempo_bpm} BPM" in out
    assert f"Pas courant (Absolu) : 1 / {sequence.length_in_steps}" in out
    assert "Progression dans le pas : 0.00%" in out
    assert "Mode : SÉQUENCE" in out


def test_playback_then_stop(player, transport):
    transport.play()
    player.process_audio(int(player.samples_per_step * 3))
    assert player.current_step > 0
    assert transport.info().state is TransportState.PLAYING
    transport.stop()
    assert player.current_step == 0