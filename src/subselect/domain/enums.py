"""Domain enums for subselect."""

from enum import Enum


class TrackType(Enum):
    """Kind of track handled by the selection engine.

    Hosts report subtitles as ``"sub"``; ``"subtitle"`` is accepted as an
    alias when parsing.
    """

    AUDIO = "audio"
    SUBTITLE = "sub"

    @classmethod
    def from_host(cls, value: object) -> "TrackType | None":
        """Map a host track type string to a TrackType.

        Returns:
            The matching TrackType, or None for types the engine ignores
            (video, attachments, unknown values).
        """
        if not isinstance(value, str):
            return None
        normalized = value.casefold()
        if normalized == "audio":
            return cls.AUDIO
        if normalized in ("sub", "subtitle"):
            return cls.SUBTITLE
        return None


class TrackState(str, Enum):
    """Non-numeric outcomes of a track decision.

    DISABLED is an explicit "no track" decision (host value ``"no"``).
    UNSET means the engine made no decision and the host default applies.
    """

    DISABLED = "disabled"
    UNSET = "unset"
