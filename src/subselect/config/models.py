"""Configuration data models.

This module defines dataclasses for subselect configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

PREFERENCES_FILENAME = "sub-select.json"


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "subselect"


@dataclass
class SelectionConfig:
    """Options controlling when and how selection runs."""

    # Run even when the host's subtitle option is not "auto"
    force_enable: bool = False

    # Select synchronously before playback starts, predicting the default
    # audio track; when False, select after playback starts instead
    preload: bool = True

    # Also select the audio track from the preferences. Overrides
    # force_prediction and detect_incorrect_predictions.
    select_audio: bool = False

    # Force the host onto the predicted audio track
    force_prediction: bool = False

    # Re-check subtitles after playback starts if the prediction was wrong
    detect_incorrect_predictions: bool = True

    # Reselect subtitles whenever the audio language changes
    observe_audio_switches: bool = False

    # Only select forced subtitles when a rule asks for "forced"
    explicit_forced_subs: bool = False

    # Directory holding the preference file
    config_dir: Path = field(default_factory=_default_config_dir)

    # Explicit preference file; overrides config_dir / sub-select.json
    preferences_file: Path | None = None

    @property
    def preferences_path(self) -> Path:
        """Path of the preference JSON file."""
        if self.preferences_file is not None:
            return self.preferences_file.expanduser()
        return self.config_dir.expanduser() / PREFERENCES_FILENAME

    @property
    def detects_incorrect_predictions(self) -> bool:
        """Whether a wrong prediction triggers a re-check after file load.

        Audio selection, forced predictions and audio-switch observation
        each make the separate check redundant.
        """
        return (
            self.detect_incorrect_predictions
            and not self.select_audio
            and not self.force_prediction
            and not self.observe_audio_switches
        )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must not be negative")


@dataclass
class SubSelectConfig:
    """Main configuration container."""

    selection: SelectionConfig = field(default_factory=SelectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
