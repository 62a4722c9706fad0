"""Selection engine: audio prediction and preference rule matching."""

from subselect.selection.matcher import NOT_GIVEN, RuleMatcher
from subselect.selection.predictor import (
    PredictionKey,
    normalize_language_priority,
    parse_aid_option,
    predict_audio,
    prediction_key,
)
from subselect.selection.secondary import resolve_secondary

__all__ = [
    "NOT_GIVEN",
    "PredictionKey",
    "RuleMatcher",
    "normalize_language_priority",
    "parse_aid_option",
    "predict_audio",
    "prediction_key",
    "resolve_secondary",
]
