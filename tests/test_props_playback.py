"""Property-based tests for PlaybackState using Hypothesis.

These tests validate invariants of the playback state container that
should hold for any queue, pointer position and sequence of controls.
"""

import random
from backend.models.player import RepeatMode
from core.playback import PlaybackState
from hypothesis import given, strategies as st
from tests.helpers.catalog import make_song

repeat_modes = st.sampled_from(list(RepeatMode))
finite_floats = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)


def new_player(seed: int = 0) -> PlaybackState:
    return PlaybackState(volume=0.8, skip_back_threshold=3.0, rng=random.Random(seed))


def loaded_player(size: int, start: int, repeat: RepeatMode = RepeatMode.OFF, seed: int = 0) -> PlaybackState:
    player = new_player(seed)
    tracks = [make_song(i) for i in range(1, size + 1)]
    player.play(tracks[start], tracks)
    while player.repeat is not repeat:
        player.toggle_repeat()
    return player


@st.composite
def queue_and_index(draw, max_size=20):
    size = draw(st.integers(min_value=1, max_value=max_size))
    index = draw(st.integers(min_value=0, max_value=size - 1))
    return size, index


def assert_pointer_consistent(player: PlaybackState):
    if player.current_index is not None:
        assert 0 <= player.current_index < len(player.queue)
        assert player.queue[player.current_index] == player.current_track


class TestRemoveProperties:
    """Properties of removing queue elements."""

    @given(queue_and_index(), repeat_modes)
    def test_removing_current_points_at_following_element(self, sized, repeat):
        """Removing the current element leaves the pointer on the element that followed it."""
        size, index = sized
        player = loaded_player(size, index, repeat)
        expected_next = player.queue[index + 1] if index + 1 < size else None

        player.remove_at(index)

        assert len(player.queue) == size - 1
        if size == 1:
            assert player.current_track is None
            assert player.current_index is None
        elif expected_next is not None:
            assert player.current_index == index
            assert player.current_track == expected_next
        elif repeat is RepeatMode.OFF:
            assert player.current_track is None
            assert player.is_playing is False
        else:
            assert player.current_index == 0
        assert_pointer_consistent(player)

    @given(queue_and_index(), st.integers(min_value=0, max_value=19))
    def test_removing_other_element_keeps_current_track(self, sized, target):
        """Removing any other element keeps the same track current."""
        size, index = sized
        target = target % size
        player = loaded_player(size, index)
        current = player.current_track

        player.remove_at(target)

        if target != index:
            assert player.current_track == current
            assert_pointer_consistent(player)


class TestNavigationProperties:
    """Properties of next and previous."""

    @given(queue_and_index())
    def test_next_then_previous_round_trip(self, sized):
        """Next followed by previous within the threshold returns to the starting track."""
        size, index = sized
        player = loaded_player(size, index)
        start = player.current_track

        moved = player.next_track() is not None
        result = player.previous_track()

        if moved:
            assert result == start
            assert player.current_index == index
            assert player.current_time == 0

    @given(st.integers(min_value=1, max_value=15), st.integers(min_value=0, max_value=10_000))
    def test_shuffle_visits_every_track_once(self, size, seed):
        """With repeat off, shuffle plays every queued track exactly once then stops."""
        player = loaded_player(size, 0, seed=seed)
        player.toggle_shuffle()

        seen = [player.current_track.id]
        while (track := player.next_track()) is not None:
            seen.append(track.id)
            assert len(seen) <= size

        assert sorted(seen) == list(range(1, size + 1))
        assert player.is_playing is False
        assert [song.id for song in player.queue] == list(range(1, size + 1))

    @given(repeat_modes)
    def test_repeat_cycle_returns_to_start(self, initial):
        """Three repeat toggles return to the initial mode."""
        player = new_player()
        while player.repeat is not initial:
            player.toggle_repeat()

        for _ in range(3):
            player.toggle_repeat()

        assert player.repeat is initial

    @given(
        st.lists(
            st.sampled_from(["next", "previous", "shuffle", "repeat", "remove", "add", "clear", "seek"]),
            max_size=40,
        ),
        st.integers(min_value=0, max_value=1000),
    )
    def test_pointer_stays_consistent(self, operations, seed):
        """Any sequence of controls keeps the pointer inside the queue."""
        player = loaded_player(5, 0, seed=seed)
        rng = random.Random(seed)
        next_id = 6

        for operation in operations:
            if operation == "next":
                player.next_track()
            elif operation == "previous":
                player.previous_track()
            elif operation == "shuffle":
                player.toggle_shuffle()
            elif operation == "repeat":
                player.toggle_repeat()
            elif operation == "remove" and player.queue:
                player.remove_at(rng.randrange(len(player.queue)))
            elif operation == "add":
                player.add_to_queue(make_song(next_id))
                next_id += 1
            elif operation == "clear":
                player.clear_queue()
            elif operation == "seek":
                player.seek_to(rng.uniform(-10, 400))

            assert_pointer_consistent(player)
            assert 0 <= player.current_time <= player.duration or player.current_track is None


class TestClampProperties:
    """Properties of seek and volume clamping."""

    @given(finite_floats, st.integers(min_value=1, max_value=3600))
    def test_seek_is_clamped_to_duration(self, target, duration):
        """Seeking never leaves [0, duration]."""
        player = new_player()
        track = make_song(1, duration=duration)
        player.play(track, [track])

        position = player.seek_to(target)

        assert 0 <= position <= duration
        if 0 <= target <= duration:
            assert position == target

    @given(finite_floats)
    def test_volume_is_clamped(self, level):
        """Volume never leaves [0, 1]."""
        player = new_player()

        volume = player.set_volume(level)

        assert 0.0 <= volume <= 1.0
        if 0 <= level <= 1:
            assert volume == level
