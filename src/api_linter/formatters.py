"""Output formatters for validation results: text, json and summary."""

import json

import click

from api_linter.model import Severity, ValidationResult

_STYLE = {
    Severity.ERROR: ("red", "✗"),
    Severity.WARNING: ("yellow", "⚠"),
    Severity.INFO: ("blue", "ℹ"),
}

RULE_WIDTH = 70


def format_text(result: ValidationResult, color: bool = True) -> str:
    def style(text: str, fg: str) -> str:
        return click.style(text, fg=fg) if color else text

    rule = style("=" * RULE_WIDTH, "blue")
    title = "API Linter Results" + (" [AI-Enhanced]" if result.metadata.ai_enhanced else "")
    lines = [
        "",
        rule,
        style(title, "blue"),
        rule,
        "",
        f"File:     {result.file}",
        f"Strategy: {style(result.strategy, 'blue')}",
        f"Found:    {result.summary.total} issue(s)",
        "",
    ]

    if not result.issues:
        lines.append(style("✓ No issues found! API spec looks good.", "green"))
        lines.append("")

    for issue in result.issues:
        fg, symbol = _STYLE[issue.severity]
        lines.append(f"{style(symbol, fg)} {style(issue.severity.value.upper(), fg)}: {issue.message}")
        lines.append(f"  {style('Location:', 'bright_black')} {issue.location}")
        if issue.suggestion:
            lines.append(f"  {style('Suggestion:', 'bright_black')} {issue.suggestion}")
        if issue.ai_suggestion:
            lines.append(f"  {style('AI Suggestion:', 'magenta')} {issue.ai_suggestion}")
        lines.append("")

    if result.ai_recommendations:
        lines.extend([style("AI General Recommendations", "magenta"), result.ai_recommendations, ""])

    lines.extend([rule, ""])
    return "\n".join(lines)


def format_summary(result: ValidationResult, color: bool = True) -> str:
    def style(text: str, fg: str) -> str:
        return click.style(text, fg=fg) if color else text

    rule = style("=" * 60, "blue")
    return "\n".join([
        "",
        rule,
        style("API Linter Summary", "blue"),
        rule,
        "",
        f"File:     {result.file}",
        f"Strategy: {result.strategy}",
        "",
        style(f"✗ {result.summary.errors} errors", "red"),
        style(f"⚠ {result.summary.warnings} warnings", "yellow"),
        style(f"ℹ {result.summary.info} info", "blue"),
        "",
    ])


def format_json(result: ValidationResult) -> str:
    """Full result as JSON. AI fields only appear once they have been set."""
    data = result.model_dump(mode="json")
    if data["ai_recommendations"] is None:
        del data["ai_recommendations"]
    for issue in data["issues"]:
        if issue["ai_suggestion"] is None:
            del issue["ai_suggestion"]
    return json.dumps(data, indent=2, ensure_ascii=False)


def render(result: ValidationResult, fmt: str, color: bool = True) -> str:
    if fmt == "json":
        return format_json(result)
    if fmt == "summary":
        return format_summary(result, color=color)
    return format_text(result, color=color)
