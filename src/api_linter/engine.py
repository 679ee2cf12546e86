"""Validation engine: runs the selected validators and assembles a ValidationResult.

Used by the CLI, and by anything else that already holds a parsed spec.
"""

import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from api_linter.config import Settings
from api_linter.model import (
    Issue,
    RunMetadata,
    Severity,
    Summary,
    ValidationOptions,
    ValidationResult,
)
from api_linter.registry import CommonFieldRegistry, load_default_registry
from api_linter.validators import VALIDATOR_NAMES, build_validators

logger = logging.getLogger(__name__)


class InvalidSpecError(ValueError):
    """The document is not an OpenAPI tree at all (top level is not a mapping)."""


def select_validators(selection: str | list[str] | None) -> list[str]:
    """Names to run, in declaration order. Unknown names are dropped."""
    if selection is None or selection == "all" or selection == []:
        return list(VALIDATOR_NAMES)
    if isinstance(selection, str):
        selection = [selection]
    wanted = set(selection)
    return [name for name in VALIDATOR_NAMES if name in wanted]


def filter_by_severity(issues: list[Issue], min_severity: Severity | str) -> list[Issue]:
    """Keep issues at least as severe as min_severity.

    Ranks are error=0, warning=1, info=2 and an issue is kept when its rank
    is <= the threshold rank: "warning" keeps errors and warnings.
    """
    threshold = Severity(min_severity).rank
    return [issue for issue in issues if issue.severity.rank <= threshold]


def run_validation(
    spec: Any,
    options: ValidationOptions | Mapping | None = None,
    *,
    registry: CommonFieldRegistry | None = None,
    suggester=None,
) -> ValidationResult:
    """Validate a parsed OpenAPI document.

    Raises InvalidSpecError if spec is not a mapping. Validation findings
    are always returned in the result, never raised.
    """
    if not isinstance(spec, Mapping):
        raise InvalidSpecError(f"OpenAPI document must be a mapping at the top level, got {type(spec).__name__}")

    if options is None:
        options = ValidationOptions()
    elif not isinstance(options, ValidationOptions):
        options = ValidationOptions.model_validate(options)

    if registry is None:
        registry = load_default_registry()

    available = build_validators(registry)
    selected = select_validators(options.validators)
    logger.debug("Running %d validators: %s", len(selected), ", ".join(selected))

    started = time.perf_counter()
    issues: list[Issue] = []
    for name in selected:
        found = available[name].validate(spec)
        logger.debug("Validator %s reported %d issues", name, len(found))
        issues.extend(found)
    duration_ms = (time.perf_counter() - started) * 1000

    filtered = filter_by_severity(issues, options.min_severity)

    ai_enhanced = False
    ai_recommendations = None
    if options.enable_ai:
        if suggester is None:
            from api_linter.ai import AiSuggester

            suggester = AiSuggester(model=Settings.from_env().model)
        context = {
            "api_title": _info(spec).get("title"),
            "api_version": _info(spec).get("version"),
            "industry": options.industry,
        }
        limit = options.ai_issue_limit
        filtered = suggester.enhance_batch(filtered[:limit], context) + filtered[limit:]
        ai_recommendations = suggester.general_recommendations(spec, filtered)
        ai_enhanced = True

    return ValidationResult(
        file=options.file_name,
        strategy=options.strategy,
        timestamp=datetime.now(timezone.utc).isoformat(),
        summary=Summary.from_issues(filtered),
        issues=filtered,
        metadata=RunMetadata(
            duration_ms=round(duration_ms, 3),
            validators_run=len(selected),
            common_fields_loaded=registry.field_count(),
            ai_enhanced=ai_enhanced,
        ),
        ai_recommendations=ai_recommendations,
    )


def get_available_validators() -> list[dict[str, str]]:
    return [
        {"name": v.name, "description": v.description}
        for v in build_validators(CommonFieldRegistry.empty()).values()
    ]


def get_common_fields(registry: CommonFieldRegistry | None = None) -> dict[str, Any]:
    """Loaded common field definitions, for display."""
    if registry is None:
        registry = load_default_registry()
    return {
        "count": registry.field_count(),
        "fields": {name: d.as_schema() for name, d in registry.fields().items()},
    }


def _info(spec: Mapping) -> Mapping:
    info = spec.get("info")
    return info if isinstance(info, Mapping) else {}
