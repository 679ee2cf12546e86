"""Result models shared by the engine, validators and output layers.

Validators emit Issue records; the engine wraps the filtered list
into a ValidationResult for the CLI (or any other caller).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Issue severity. Lower rank means more severe."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


class Issue(BaseModel):
    """A single finding reported by a validator."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    location: str  # /pets/{petId}.get.parameters[0]
    suggestion: str | None = None
    validator: str
    ai_suggestion: str | None = None  # only set by the AI enrichment hook


class Summary(BaseModel):
    total: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0

    @classmethod
    def from_issues(cls, issues: list[Issue]) -> "Summary":
        return cls(
            total=len(issues),
            errors=sum(1 for i in issues if i.severity is Severity.ERROR),
            warnings=sum(1 for i in issues if i.severity is Severity.WARNING),
            info=sum(1 for i in issues if i.severity is Severity.INFO),
        )


class RunMetadata(BaseModel):
    duration_ms: float
    validators_run: int
    common_fields_loaded: int
    ai_enhanced: bool = False


class ValidationResult(BaseModel):
    """Everything one validation run produces. Owned by the caller."""

    file: str
    strategy: str
    timestamp: str  # UTC, ISO-8601
    summary: Summary
    issues: list[Issue]
    metadata: RunMetadata
    ai_recommendations: str | None = None


class ValidationOptions(BaseModel):
    """Options accepted by run_validation.

    camelCase keys (minSeverity, fileName, ...) are accepted as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    strategy: str = "inline"  # echoed into the result, not interpreted
    min_severity: Severity = Severity.WARNING
    validators: str | list[str] | None = "all"
    file_name: str = "api-spec.yaml"
    enable_ai: bool = False
    industry: str = "general"
    ai_issue_limit: int = Field(default=10, ge=0)
