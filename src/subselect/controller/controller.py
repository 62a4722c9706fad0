"""Selection controller: wires host events to the selection engine.

The controller owns all mutable session state. Host callbacks call the
public ``on_*`` methods (or the control surface, select_subtitles() and
toggle()); each call is turned into an event and processed through
dispatch(), one event at a time and in arrival order.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any

from subselect.config.models import SelectionConfig
from subselect.controller.host import PlayerHost
from subselect.controller.session import SessionState
from subselect.domain import SelectionResult, Track, decision_to_property
from subselect.policy.types import PreferenceRule
from subselect.selection import NOT_GIVEN, RuleMatcher, predict_audio
from subselect.tracks import TrackListError, TrackRegistry

logger = logging.getLogger(__name__)

TOGGLE_ARGS = ("enable", "disable", "toggle")


class SelectionController:
    """Runs track selection in response to host events.

    Example:
        host = InMemoryHost({"track-list": tracks, "options/sid": "auto"})
        controller = SelectionController(host, rules, SelectionConfig())
        controller.on_preloaded()
        controller.on_file_loaded()
    """

    def __init__(
        self,
        host: PlayerHost,
        preferences: Sequence[PreferenceRule],
        config: SelectionConfig | None = None,
        matcher: RuleMatcher | None = None,
    ) -> None:
        self.host = host
        self.preferences = tuple(preferences)
        self.config = config or SelectionConfig()
        self.matcher = matcher or RuleMatcher(
            explicit_forced_subs=self.config.explicit_forced_subs
        )
        self.session = SessionState(
            enabled=self.config.force_enable
            or host.get_property("options/sid", "auto") == "auto"
        )
        self.last_result: SelectionResult | None = None

        self._queue: deque[tuple[Callable[..., None], tuple[Any, ...]]] = deque()
        self._lock = threading.Lock()
        self._processing = False

    # Event queue

    def dispatch(self, handler: Callable[..., None], *args: Any) -> None:
        """Queue an event handler and process the queue.

        If an event is already being processed (a re-entrant call from a
        handler, or a call from another thread), the event is queued and
        run after the current one by the thread already draining the
        queue.
        """
        with self._lock:
            self._queue.append((handler, args))
            if self._processing:
                return
            self._processing = True

        try:
            while True:
                with self._lock:
                    if not self._queue:
                        self._processing = False
                        return
                    next_handler, next_args = self._queue.popleft()
                next_handler(*next_args)
        except Exception:
            with self._lock:
                self._processing = False
            raise

    # Host events

    def on_preloaded(self) -> None:
        """A new file is about to start; tracks are known."""
        self.dispatch(self._handle_preloaded)

    def on_file_loaded(self) -> None:
        """Playback of the new file has started."""
        self.dispatch(self._handle_file_loaded)

    def on_track_list_changed(self) -> None:
        """The host's track count changed."""
        self.dispatch(self._read_track_list)

    def on_audio_changed(self, aid: Any) -> None:
        """The host's current audio track changed."""
        self.dispatch(self._handle_audio_changed, aid)

    def on_track_auto_selection_changed(self, flag: bool) -> None:
        """The host's track-auto-selection flag changed."""
        self.dispatch(self._handle_track_auto_selection, flag)

    # Control surface

    def select_subtitles(self) -> None:
        """Force a selection for the current audio track."""
        self.dispatch(self._async_select)

    def toggle(self, arg: str = "toggle") -> None:
        """Enable, disable or toggle automatic selection."""
        self.dispatch(self._handle_toggle, arg)

    # Handlers

    def _handle_preloaded(self) -> None:
        self.session.reset_file()
        self._read_track_list()
        if self.config.preload and self._can_continue():
            self._preload()

    def _handle_file_loaded(self) -> None:
        if not self.config.preload:
            if self._can_continue():
                self._async_select()
        elif self.config.detects_incorrect_predictions:
            self._reselect_if_audio_changed()

    def _handle_audio_changed(self, aid: Any) -> None:
        if not self.config.observe_audio_switches:
            return
        if str(aid) != "auto":
            self._reselect_if_audio_changed()

    def _handle_track_auto_selection(self, flag: bool) -> None:
        self.session.track_auto_selection = bool(flag)

    def _handle_toggle(self, arg: str) -> None:
        if arg == "toggle":
            self.session.enabled = not self.session.enabled
        elif arg == "enable":
            self.session.enabled = True
        elif arg == "disable":
            self.session.enabled = False
        else:
            logger.warning(
                "Unknown toggle argument %r (expected one of %s)",
                arg,
                ", ".join(TOGGLE_ARGS),
            )

        state = "enabled" if self.session.enabled else "disabled"
        self.host.show_message(f"sub-select: {state}")

        if self._can_continue():
            self._async_select()

    # Selection

    def _read_track_list(self) -> None:
        raw = self.host.get_property("track-list", [])
        try:
            self.session.registry = TrackRegistry.from_track_list(raw)
        except TrackListError as e:
            logger.warning("Ignoring unusable track list: %s", e)
            self.session.registry = TrackRegistry()

    def _can_continue(self) -> bool:
        if not self.session.registry.subtitles:
            return False
        if not self.session.enabled:
            return False
        if not self.session.track_auto_selection:
            return False
        return True

    def _current_audio(self) -> Track | None:
        return self.session.registry.audio_by_id(self.host.get_property("aid"))

    def _preload(self) -> None:
        if self.config.select_audio:
            self._select_tracks(NOT_GIVEN)
            return

        audio = predict_audio(
            self.session.registry.audio,
            self.host.get_property("options/aid", "auto"),
            self.host.get_property("alang", ()),
        )
        self.session.predicted_audio = audio
        if self.config.force_prediction and audio is not None:
            self._set_track("aid", audio.id)
        self._select_tracks(audio)

    def _async_select(self) -> None:
        if self.config.select_audio:
            self._select_tracks(NOT_GIVEN)
        else:
            self._select_tracks(self._current_audio())

    def _reselect_if_audio_changed(self) -> None:
        if not self._can_continue():
            return

        latest = self.session.latest_audio
        current = self._current_audio()
        latest_id = latest.id if latest else None
        current_id = current.id if current else None
        if latest_id == current_id:
            return

        latest_lang = latest.lang if latest else None
        current_lang = current.lang if current else None
        if latest_lang != current_lang:
            logger.info("Detected audio change - reselecting subtitles")
            self._select_tracks(current)

    def _select_tracks(self, manual_audio: Any) -> None:
        registry = self.session.registry
        result = self.matcher.select(
            self.preferences,
            registry.audio,
            registry.subtitles,
            manual_audio=manual_audio,
        )
        if isinstance(manual_audio, Track) or manual_audio is None:
            selected_audio = manual_audio
        else:
            selected_audio = registry.audio_by_id(result.audio_id)
        self._apply(result, selected_audio)
        self.last_result = result

    def _apply(self, result: SelectionResult, selected_audio: Track | None) -> None:
        sid = decision_to_property(result.sub_id)
        if sid is not None:
            self._set_track("sid", sid)

        secondary_sid = decision_to_property(result.secondary_sub_id)
        if secondary_sid is not None:
            self._set_track("secondary-sid", secondary_sid)

        aid = decision_to_property(result.audio_id)
        if aid is not None and self.config.select_audio:
            self._set_track("aid", aid)

        if result.sub_visibility is not None:
            self._set_flag("sub-visibility", result.sub_visibility)
        if result.secondary_sub_visibility is not None:
            self._set_flag("secondary-sub-visibility", result.secondary_sub_visibility)

        # Before playback starts the host has not resolved its audio track yet
        if self.host.get_property("aid", "auto") in (None, "auto"):
            self.session.latest_audio = selected_audio
        else:
            self.session.latest_audio = self._current_audio()

    def _set_track(self, name: str, value: int | str) -> None:
        logger.debug("Setting %s to %s", name, value)
        current = self.host.get_property(name)
        if current == value or (current is not None and str(current) == str(value)):
            return
        self.host.set_property(name, value)

    def _set_flag(self, name: str, value: bool) -> None:
        logger.debug("Setting %s to %s", name, value)
        if self.host.get_property(name) == value:
            return
        self.host.set_property(name, value)
