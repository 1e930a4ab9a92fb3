from typing import List
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RuleSnapshot(BaseModel):
    """Plain-string copy of a rule set, used by hosts to save and restore rules."""
    address_patterns: List[str] = Field(default_factory=list)   # literals
    code_patterns: List[str] = Field(default_factory=list)      # regex sources
    ignore_keywords: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
