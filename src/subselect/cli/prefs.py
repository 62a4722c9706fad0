"""CLI commands for preference file management.

- prefs validate: Validate a preference file
- prefs show: Display the rules of a preference file
"""

import logging
from pathlib import Path

import click

from subselect.cli.exit_codes import ExitCode
from subselect.cli.inputs import load_selection_config, read_preferences
from subselect.cli.output import echo_json, format_option
from subselect.policy import (
    PreferenceLoadError,
    PreferenceValidationError,
    load_preferences,
    rule_warnings,
)

logger = logging.getLogger(__name__)


@click.group("prefs")
def prefs_group() -> None:
    """Manage the preference file.

    Examples:

        # Validate the default preference file
        subselect prefs validate

        # Show rules from a specific file as JSON
        subselect prefs show my-prefs.json --format json
    """
    pass


# =============================================================================
# Validate Command
# =============================================================================


@prefs_group.command("validate")
@click.argument("prefs_file", required=False, type=click.Path(path_type=Path))
@format_option
@click.pass_context
def validate_prefs_cmd(
    ctx: click.Context, prefs_file: Path | None, output_format: str
) -> None:
    """Validate a preference JSON file.

    Checks that the file is a JSON array of valid rule objects. Invalid
    regex patterns and conditions are reported as warnings; they do not
    fail validation.

    Exit codes:
        0: Preferences are valid
        10: Preference validation failed
    """
    json_output = output_format == "json"
    if prefs_file is None:
        prefs_file = load_selection_config(ctx, json_output).preferences_path

    result = _validate_prefs(prefs_file)

    if json_output:
        echo_json(result)
    else:
        _output_human(result)

    if not result["valid"]:
        raise SystemExit(ExitCode.PREFERENCE_VALIDATION_ERROR)


def _validate_prefs(prefs_path: Path) -> dict:
    """Validate a preference file and return the result as a dict.

    Returns:
        Dict with keys: valid, file, message, rules, errors, warnings
    """
    result = {
        "valid": False,
        "file": str(prefs_path),
        "rules": 0,
        "errors": [],
        "warnings": [],
    }

    try:
        rules = load_preferences(prefs_path)
    except PreferenceValidationError as e:
        result["errors"].append(
            {
                "rule_index": e.rule_index,
                "field": e.field,
                "message": e.message,
                "code": "validation_error",
            }
        )
        result["message"] = str(e)
        return result
    except PreferenceLoadError as e:
        result["errors"].append(
            {
                "rule_index": None,
                "field": None,
                "message": str(e),
                "code": "load_error",
            }
        )
        result["message"] = str(e)
        return result

    for index, rule in enumerate(rules):
        for warning in rule_warnings(rule):
            result["warnings"].append(f"rule[{index}]: {warning}")

    result["valid"] = True
    result["rules"] = len(rules)
    result["message"] = f"{len(rules)} rule(s) valid"
    return result


def _output_human(result: dict) -> None:
    """Output validation result in human-readable format."""
    if result["valid"]:
        click.echo(click.style("Valid", fg="green") + f": {result['file']}")
        click.echo(f"  {result['message']}")
    else:
        click.echo(click.style("Invalid", fg="red") + f": {result['file']}")
        if result.get("message"):
            click.echo(f"  {result['message']}")
    for warning in result["warnings"]:
        click.echo(click.style("  Warning", fg="yellow") + f": {warning}")


# =============================================================================
# Show Command
# =============================================================================


@prefs_group.command("show")
@click.argument("prefs_file", required=False, type=click.Path(path_type=Path))
@format_option
@click.pass_context
def show_prefs_cmd(
    ctx: click.Context, prefs_file: Path | None, output_format: str
) -> None:
    """Display the rules of a preference file in priority order."""
    json_output = output_format == "json"
    if prefs_file is None:
        prefs_file = load_selection_config(ctx, json_output).preferences_path

    rules = read_preferences(prefs_file, json_output)

    if json_output:
        echo_json(
            {"file": str(prefs_file), "rules": [rule.to_dict() for rule in rules]}
        )
        return

    click.echo(f"\nPreferences: {prefs_file}")
    click.echo("=" * 60)
    if not rules:
        click.echo("  (no rules)")
    for index, rule in enumerate(rules):
        click.echo(f"  [{index}] " + _format_rule(rule.to_dict()))
    click.echo()


def _format_rule(fields: dict) -> str:
    parts = []
    for key, value in fields.items():
        if isinstance(value, (list, tuple)):
            value = ",".join(value)
        parts.append(f"{key}={value}")
    return " ".join(parts)
