"""AI suggestion hook: enriches issues with LLM-written advice.

Enrichment only ever adds Issue.ai_suggestion. When a call fails the
issue comes back unchanged, so severities and core content never depend
on the model.
"""

import logging
from collections.abc import Mapping

from api_linter.llm import LlmClient
from api_linter.model import Issue, Severity

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an OpenAPI specification expert helping to improve API design. "
    "Answer concisely and concretely."
)


def build_issue_prompt(issue: Issue, context: Mapping) -> str:
    return (
        "Context:\n"
        f"- API Title: {context.get('api_title') or 'Unknown'}\n"
        f"- API Version: {context.get('api_version') or 'Unknown'}\n"
        f"- Industry: {context.get('industry') or 'General'}\n\n"
        "Validation Issue:\n"
        f"- Severity: {issue.severity.value}\n"
        f"- Validator: {issue.validator}\n"
        f"- Location: {issue.location}\n"
        f"- Issue: {issue.message}\n"
        f"- Current Suggestion: {issue.suggestion or 'None'}\n\n"
        "Task: explain in 2-3 sentences why this is a problem and give a concrete "
        "example of the fix in OpenAPI YAML."
    )


def build_recommendations_prompt(spec: Mapping, issues: list[Issue]) -> str:
    info = spec.get("info") if isinstance(spec.get("info"), Mapping) else {}
    components = spec.get("components") if isinstance(spec.get("components"), Mapping) else {}
    paths = spec.get("paths") if isinstance(spec.get("paths"), Mapping) else {}
    schemas = components.get("schemas") if isinstance(components.get("schemas"), Mapping) else {}
    errors = sum(1 for i in issues if i.severity is Severity.ERROR)
    warnings = sum(1 for i in issues if i.severity is Severity.WARNING)
    return (
        "API Information:\n"
        f"- Title: {info.get('title') or 'Unknown'}\n"
        f"- Version: {info.get('version') or 'Unknown'}\n"
        f"- Endpoints: {len(paths)}\n"
        f"- Schemas: {len(schemas)}\n\n"
        "Validation Summary:\n"
        f"- Errors: {errors}\n"
        f"- Warnings: {warnings}\n\n"
        "Task: give 3-5 high-level recommendations (1-2 sentences each) covering "
        "design, security, documentation completeness and consistency."
    )


class AiSuggester:
    """Issue enrichment backed by an LlmClient."""

    def __init__(self, model: str | None = None, client: LlmClient | None = None):
        self.client = client or LlmClient(model=model)

    def enhance(self, issue: Issue, context: Mapping) -> Issue:
        try:
            text = self.client.call(system=SYSTEM_PROMPT, user=build_issue_prompt(issue, context))
        except Exception as e:
            logger.warning("AI enhancement failed for %s at %s: %s", issue.validator, issue.location, e)
            return issue
        if not text:
            return issue
        return issue.model_copy(update={"ai_suggestion": text.strip()})

    def enhance_batch(self, issues: list[Issue], context: Mapping) -> list[Issue]:
        enhanced = [self.enhance(issue, context) for issue in issues]
        logger.info(
            "Enhanced %d/%d issues with AI suggestions",
            sum(1 for i in enhanced if i.ai_suggestion),
            len(issues),
        )
        return enhanced

    def general_recommendations(self, spec: Mapping, issues: list[Issue]) -> str | None:
        try:
            text = self.client.call(system=SYSTEM_PROMPT, user=build_recommendations_prompt(spec, issues))
        except Exception as e:
            logger.warning("Failed to get general recommendations: %s", e)
            return None
        return text.strip() if text else None
