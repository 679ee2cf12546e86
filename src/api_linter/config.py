"""Runtime settings read from the environment.

    API_LINTER_MODEL          litellm model used for AI suggestions
    API_LINTER_MIN_SEVERITY   error | warning | info
    API_LINTER_STRATEGY       label echoed into results
    API_LINTER_COMMON_FIELDS  path to the common field table (YAML)
    API_LINTER_AI             enable AI suggestions (true/1/yes)
    API_LINTER_INDUSTRY       industry hint passed to the AI prompt
"""

import os
from pathlib import Path

from pydantic import BaseModel

from api_linter.model import Severity

DEFAULT_MODEL = "gemini/gemini-1.5-flash"

_TRUE = ("true", "1", "yes", "on")


class Settings(BaseModel):
    model: str = DEFAULT_MODEL
    min_severity: Severity = Severity.WARNING
    strategy: str = "inline"
    common_fields_path: Path | None = None
    enable_ai: bool = False
    industry: str = "general"

    @classmethod
    def from_env(cls) -> "Settings":
        values = {}
        if os.getenv("API_LINTER_MODEL"):
            values["model"] = os.environ["API_LINTER_MODEL"]
        if os.getenv("API_LINTER_MIN_SEVERITY"):
            values["min_severity"] = os.environ["API_LINTER_MIN_SEVERITY"].lower()
        if os.getenv("API_LINTER_STRATEGY"):
            values["strategy"] = os.environ["API_LINTER_STRATEGY"]
        if os.getenv("API_LINTER_COMMON_FIELDS"):
            values["common_fields_path"] = os.environ["API_LINTER_COMMON_FIELDS"]
        if os.getenv("API_LINTER_AI"):
            values["enable_ai"] = os.environ["API_LINTER_AI"].lower() in _TRUE
        if os.getenv("API_LINTER_INDUSTRY"):
            values["industry"] = os.environ["API_LINTER_INDUSTRY"]
        return cls(**values)
