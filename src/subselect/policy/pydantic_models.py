"""Pydantic models for preference file parsing and validation.

Each element of the preference JSON array is validated by
PreferenceRuleModel and then converted to the frozen PreferenceRule
dataclass by subselect.policy.loader.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _normalize_string_list(
    value: str | list[str] | None, field_name: str
) -> list[str] | None:
    """Normalize "a string or a list of strings" into a list."""
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not value:
        raise ValueError(f"{field_name} must not be an empty list")
    return value


class PreferenceRuleModel(BaseModel):
    """Pydantic model for one preference rule."""

    model_config = ConfigDict(extra="forbid")

    alang: str | list[str] | None = None
    slang: str | list[str]
    whitelist: str | list[str] | None = None
    blacklist: str | list[str] | None = None
    condition: str | None = None

    secondary_slang: str | list[str] | None = None
    secondary_whitelist: str | list[str] | None = None
    secondary_blacklist: str | list[str] | None = None
    secondary_condition: str | None = None

    sub_visibility: bool | None = None
    secondary_sub_visibility: bool | None = None

    @field_validator(
        "alang",
        "slang",
        "whitelist",
        "blacklist",
        "secondary_slang",
        "secondary_whitelist",
        "secondary_blacklist",
    )
    @classmethod
    def normalize_lists(cls, v: str | list[str] | None, info) -> list[str] | None:  # noqa: ANN001
        """Accept a single string wherever a list of strings is allowed."""
        return _normalize_string_list(v, info.field_name)

    @field_validator("condition", "secondary_condition")
    @classmethod
    def validate_condition_not_blank(cls, v: str | None) -> str | None:
        """Reject empty condition strings."""
        if v is not None and not v.strip():
            raise ValueError("condition must not be empty")
        return v
