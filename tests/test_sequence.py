import pytest

from adikplan.sequence import Sequence, Track
from adikplan.sound import Instrument


@pytest.fixture(scope="module")
def kick():
    return Instrument("kick_1", "Grosse Caisse", "path/to/kick.wav")


def test_track_defaults():
    track = Track("Kick", 1)
    assert track.volume == 1.0
    assert track.muted is False
    assert track.soloed is False
    assert track.events == []
    assert track.mixer_channel_index == 1


def test_add_event_uses_default_parameters(kick):
    track = Track("Kick", 1)
    event = track.add_event(kick, 4)
    assert event.instrument is kick
    assert event.step == 4
    assert event.velocity == 1.0
    assert event.pan == 0.0
    assert event.pitch == 0.0
    assert track.events == [event]


def test_add_event_keeps_given_values(kick):
    track = Track("Hat", 3)
    event = track.add_event(kick, 2, 0.7, -0.5, 1.5)
    assert (event.velocity, event.pan, event.pitch) == (0.7, -0.5, 1.5)


def test_events_at_filters_by_step_in_order(kick):
    track = Track("Kick", 1)
    first = track.add_event(kick, 0)
    track.add_event(kick, 8)
    second = track.add_event(kick, 0, 0.5)
    assert track.events_at(0) == [first, second]
    assert track.events_at(3) == []


def test_events_at_returns_stored_events(kick):
    track = Track("Kick", 1)
    track.add_event(kick, 5)
    found = track.events_at(5)[0]
    found.velocity = 0.25
    assert track.events[0].velocity == 0.25


def test_sequence_length_is_measures_times_steps():
    seq = Sequence("Intro", 2, 16)
    assert seq.length_in_steps == seq.number_of_measures * seq.steps_per_measure


def test_sequence_has_four_default_tracks_on_channels_one_to_four():
    seq = Sequence("Intro", 1, 16)
    assert [t.name for t in seq.tracks] == ["Track 1", "Track 2", "Track 3", "Track 4"]
    assert [t.mixer_channel_index for t in seq.tracks] == [1, 2, 3, 4]


def test_sequences_do_not_share_tracks(kick):
    a = Sequence("A", 1, 16)
    b = Sequence("B", 1, 16)
    a.track(0).add_event(kick, 0)
    assert b.track(0).events == []


def test_track_returns_the_same_object():
    seq = Sequence("Intro", 1, 16)
    seq.track(2).volume = 0.2
    assert seq.tracks[2].volume == 0.2


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_track_out_of_range_raises(index):
    seq = Sequence("Intro", 1, 16)
    with pytest.raises(IndexError):
        seq.track(index)