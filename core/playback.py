import random
from backend.models.player import PlayerState, RepeatMode
from backend.models.song import Song
from collections.abc import Callable, Iterable
from config import DEFAULT_VOLUME, SKIP_BACK_THRESHOLD
from core.logging import log_player_action, log_queue_operation, player_logger
from eliot import start_action

Listener = Callable[["PlaybackState"], None]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _index_of(songs: list[Song], song_id: int) -> int | None:
    for i, song in enumerate(songs):
        if song.id == song_id:
            return i
    return None


def _describe(song: Song | None) -> str:
    if song is None:
        return "No track"
    return f"{song.artist or 'Unknown'} - {song.title}"


class PlaybackState:
    """Holds what is currently playing and what is queued next.

    One instance per playback session. A single actor mutates it, so there
    is no locking. Listeners registered with subscribe() are called after
    every state-changing operation.
    """

    def __init__(
        self,
        volume: float = DEFAULT_VOLUME,
        skip_back_threshold: float = SKIP_BACK_THRESHOLD,
        rng: random.Random | None = None,
    ):
        self.current_track: Song | None = None
        self.current_index: int | None = None  # None when nothing in the queue is current
        self.is_playing = False
        self.current_time = 0.0
        self.volume = _clamp(volume, 0.0, 1.0)
        self.shuffle = False
        self.repeat = RepeatMode.OFF
        self.queue: list[Song] = []
        self.skip_back_threshold = skip_back_threshold
        # Queue positions played before the current one, shuffle mode only
        self._history: list[int] = []
        self._rng = rng or random.Random()
        self._listeners: list[Listener] = []

    @property
    def duration(self) -> float:
        return float(self.current_track.duration) if self.current_track else 0.0

    # ==================== Subscriptions ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ==================== Internal helpers ====================

    def _set_current(self, index: int, autoplay: bool = True) -> None:
        self.current_index = index
        self.current_track = self.queue[index]
        self.current_time = 0.0
        if autoplay:
            self.is_playing = True

    def _stop_and_clear(self) -> None:
        self.current_index = None
        self.current_track = None
        self.current_time = 0.0
        self.is_playing = False

    def _next_sequential_index(self) -> int | None:
        if self.current_index + 1 < len(self.queue):
            return self.current_index + 1
        if self.repeat is RepeatMode.ALL:
            return 0
        return None

    def _next_shuffle_index(self) -> int | None:
        played = set(self._history)
        played.add(self.current_index)
        candidates = [i for i in range(len(self.queue)) if i not in played]

        if not candidates:
            if self.repeat is not RepeatMode.ALL:
                return None
            # Every position played: start a fresh round
            self._history = []
            candidates = [i for i in range(len(self.queue)) if i != self.current_index] or [self.current_index]

        return self._rng.choice(candidates)

    # ==================== Playback ====================

    def play(self, track: Song, context: Iterable[Song]) -> Song:
        """Play ``track`` with the queue rebuilt from ``context`` (album or playlist songs).

        Raises:
            ValueError: if ``track`` is not part of ``context``
        """
        songs = list(context)
        start_index = _index_of(songs, track.id)
        if start_index is None:
            raise ValueError(f"Song {track.id} is not part of the playback context")

        with start_action(player_logger, "play", song_id=track.id, context_size=len(songs)):
            self.queue = songs
            self._history = []
            self._set_current(start_index)
            log_player_action("play", track=_describe(self.current_track), queue_size=len(songs), start_index=start_index)

        self._notify()
        return self.current_track

    def play_queue(self, tracks: Iterable[Song], start_index: int = 0) -> Song | None:
        """Replace the queue with ``tracks`` and start at ``start_index``.

        Returns:
            The track now playing, or None if ``tracks`` is empty
        """
        songs = list(tracks)
        if not songs:
            return None

        start_index = start_index if 0 <= start_index < len(songs) else 0
        log_queue_operation("play_queue", count=len(songs), start_index=start_index)

        self.queue = songs
        self._history = []
        self._set_current(start_index)
        log_player_action("play", track=_describe(self.current_track), queue_size=len(songs))

        self._notify()
        return self.current_track

    def play_track(self, track: Song) -> Song:
        """Play a single track, appending it to the queue if it is not queued yet."""
        index = _index_of(self.queue, track.id)
        if index is None:
            self.queue.append(track)
            index = len(self.queue) - 1
            log_queue_operation("append", song_id=track.id, queue_size=len(self.queue))

        if self.shuffle and self.current_index is not None and self.current_index != index:
            self._history.append(self.current_index)

        self._set_current(index)
        log_player_action("play_track", track=_describe(track))

        self._notify()
        return track

    def toggle_play_pause(self) -> bool:
        """Flip play/pause. No-op without a current track.

        Returns:
            New is_playing state
        """
        if self.current_track is None:
            log_player_action("toggle_play_pause_ignored", reason="no_current_track", description="Play/pause with nothing loaded")
            return self.is_playing

        old_state = "playing" if self.is_playing else "paused"
        self.is_playing = not self.is_playing
        log_player_action(
            "play_pause",
            track=_describe(self.current_track),
            old_state=old_state,
            new_state="playing" if self.is_playing else "paused",
        )

        self._notify()
        return self.is_playing

    def next_track(self) -> Song | None:
        """Advance to the next track honoring repeat and shuffle.

        Returns:
            The track now playing, or None if playback stopped
        """
        with start_action(player_logger, "next_track", repeat=self.repeat.value, shuffle=self.shuffle):
            if self.repeat is RepeatMode.SINGLE and self.current_track is not None:
                self.current_time = 0.0
                self.is_playing = True
                log_player_action("replay", track=_describe(self.current_track))
                self._notify()
                return self.current_track

            if not self.queue:
                self.is_playing = False
                log_player_action("next_track_stopped", reason="queue_empty", description="Next pressed but queue is empty")
                self._notify()
                return None

            if self.current_index is None:
                self._set_current(0)
                log_player_action("next_track", track=_describe(self.current_track))
                self._notify()
                return self.current_track

            next_index = self._next_shuffle_index() if self.shuffle else self._next_sequential_index()

            if next_index is None:
                # Pointer stays on the last track
                self.is_playing = False
                log_player_action(
                    "next_track_stopped",
                    reason="end_of_queue",
                    track=_describe(self.current_track),
                    description="Reached end of queue with repeat off",
                )
                self._notify()
                return None

            if self.shuffle:
                self._history.append(self.current_index)
            self._set_current(next_index)
            log_player_action("next_track", track=_describe(self.current_track), index=next_index)

        self._notify()
        return self.current_track

    def on_track_end(self) -> Song | None:
        """Handle the end of the current track."""
        return self.next_track()

    def previous_track(self) -> Song | None:
        """Restart the current track or move to the previous one.

        Past the skip-back threshold the current track restarts from 0;
        otherwise the pointer moves back one step.
        """
        if self.current_track is None:
            return None

        with start_action(player_logger, "previous_track", current_time=self.current_time):
            if (
                self.current_time > self.skip_back_threshold
                or self.repeat is RepeatMode.SINGLE
                or self.current_index is None
            ):
                self.current_time = 0.0
                log_player_action("restart", track=_describe(self.current_track))
                self._notify()
                return self.current_track

            if self.shuffle and self._history:
                prev_index = self._history.pop()
            elif self.current_index > 0:
                prev_index = self.current_index - 1
            elif self.repeat is RepeatMode.ALL:
                prev_index = len(self.queue) - 1
            else:
                log_player_action("previous_track_ignored", reason="start_of_queue", track=_describe(self.current_track))
                return self.current_track

            self._set_current(prev_index)
            log_player_action("previous_track", track=_describe(self.current_track), index=prev_index)

        self._notify()
        return self.current_track

    # ==================== Queue ====================

    def add_to_queue(self, track: Song) -> int:
        """Append a track to the end of the queue.

        Returns:
            New queue length
        """
        self.queue.append(track)
        log_queue_operation("append", song_id=track.id, queue_size=len(self.queue))
        self._notify()
        return len(self.queue)

    def remove_at(self, index: int) -> bool:
        """Remove the queue element at ``index``.

        Removing the current element moves the pointer to the element that
        followed it, wrapping to the start unless repeat is off, in which
        case playback stops.
        """
        if not (0 <= index < len(self.queue)):
            return False

        removed = self.queue.pop(index)
        log_queue_operation("remove", index=index, song_id=removed.id, current_index=self.current_index)

        self._history = [i - 1 if i > index else i for i in self._history if i != index]

        if self.current_index is not None:
            if index < self.current_index:
                self.current_index -= 1
            elif index == self.current_index:
                if not self.queue:
                    self._stop_and_clear()
                elif index < len(self.queue):
                    self._set_current(index, autoplay=False)
                elif self.repeat is not RepeatMode.OFF:
                    self._set_current(0, autoplay=False)
                else:
                    self._stop_and_clear()
                log_player_action("current_track_removed", track=_describe(self.current_track))

        self._notify()
        return True

    def remove_from_queue(self, track_id: int) -> bool:
        """Remove a song from the queue by id.

        The current element is preferred when it carries ``track_id``;
        otherwise the first match is removed.

        Returns:
            False if no queued song has that id
        """
        if self.current_index is not None and self.queue[self.current_index].id == track_id:
            index = self.current_index
        else:
            index = _index_of(self.queue, track_id)

        if index is None:
            return False
        return self.remove_at(index)

    def clear_queue(self) -> None:
        """Empty the queue. The current track keeps playing."""
        log_queue_operation("clear", count=len(self.queue))
        self.queue = []
        self.current_index = None
        self._history = []
        self._notify()

    # ==================== Modes ====================

    def toggle_shuffle(self) -> bool:
        """Toggle shuffle and return the new state.

        The queue order is never changed; shuffle only affects which
        track next_track() picks.
        """
        self.shuffle = not self.shuffle
        self._history = []
        log_player_action("toggle_shuffle", new_state="on" if self.shuffle else "off")
        self._notify()
        return self.shuffle

    def toggle_repeat(self) -> RepeatMode:
        """Cycle repeat off -> all -> single -> off and return the new mode."""
        old_mode = self.repeat
        self.repeat = self.repeat.cycle()
        log_player_action("toggle_repeat", old_state=old_mode.value, new_state=self.repeat.value)
        self._notify()
        return self.repeat

    def seek_to(self, seconds: float) -> float:
        """Seek within the current track, clamped to [0, duration].

        Returns:
            New position in seconds
        """
        if self.current_track is None:
            return self.current_time

        self.current_time = _clamp(float(seconds), 0.0, self.duration)
        self._notify()
        return self.current_time

    def set_volume(self, level: float) -> float:
        """Set volume, clamped to [0, 1]."""
        self.volume = _clamp(float(level), 0.0, 1.0)
        self._notify()
        return self.volume

    # ==================== Views ====================

    def snapshot(self) -> PlayerState:
        """Return a serializable copy of the current state."""
        return PlayerState(
            current_track=self.current_track,
            current_index=self.current_index,
            is_playing=self.is_playing,
            current_time=self.current_time,
            duration=self.duration,
            volume=self.volume,
            shuffle=self.shuffle,
            repeat=self.repeat,
            queue=list(self.queue),
        )
