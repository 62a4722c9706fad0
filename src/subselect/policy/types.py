"""Frozen preference rule types used by the matcher.

Rules are produced by subselect.policy.loader from validated pydantic
models; string-or-list fields are already normalized to tuples.
"""

from __future__ import annotations

from dataclasses import dataclass

# Sentinel tokens compared literally instead of as patterns
ANY = "*"
NO = "no"
DEFAULT = "default"
FORCED = "forced"

DEFAULT_ALANG: tuple[str, ...] = (ANY,)


@dataclass(frozen=True)
class PreferenceRule:
    """One entry of the ordered preference list.

    Earlier rules have priority over later ones. Within a rule, the order
    of alang, slang and secondary_slang entries is priority order.
    """

    slang: tuple[str, ...]
    alang: tuple[str, ...] = DEFAULT_ALANG
    whitelist: tuple[str, ...] | None = None
    blacklist: tuple[str, ...] | None = None
    condition: str | None = None
    secondary_slang: tuple[str, ...] | None = None
    secondary_whitelist: tuple[str, ...] | None = None
    secondary_blacklist: tuple[str, ...] | None = None
    secondary_condition: str | None = None
    sub_visibility: bool | None = None
    secondary_sub_visibility: bool | None = None

    def __post_init__(self) -> None:
        """Validate rule invariants."""
        if not self.slang:
            raise ValueError("slang must contain at least one entry")
        if not self.alang:
            raise ValueError("alang must contain at least one entry")

    def to_dict(self) -> dict:
        """Serialize back to the JSON shape, omitting unset fields."""
        data: dict = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "alang" and value == DEFAULT_ALANG:
                continue
            data[name] = list(value) if isinstance(value, tuple) else value
        return data
