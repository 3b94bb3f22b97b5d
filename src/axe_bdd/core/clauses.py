from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

# Clause order is fixed: within -> excluding -> according to -> checking/skipping -> with options.
# The checking/skipping clause is one alternation so a sentence can only ever carry one rules mode.
# Quoted selectors stop at the next double quote; attribute selectors use single quotes.
STEP_PATTERN_TEXT = (
    r"^the page should(?P<negate> not)? be accessible"
    r'(?: within "(?P<inclusion>[^"]*)")?'
    r'(?:(?: but)? excluding "(?P<exclusion>[^"]*)")?'
    r"(?: according to: (?P<tags>.*?))?"
    r"(?: (?:checking(?P<only> only)?|(?P<skipping>skipping)): (?P<rules>.*?))?"
    r"(?: with options: (?P<options>.*?))?$"
)
STEP_PATTERN = re.compile(STEP_PATTERN_TEXT)

_LIST_SEPARATOR_RE = re.compile(r",\s*")


class RulesMode(str, enum.Enum):
    ALLOW_ONLY = "allow_only"
    CHECK = "check"
    SKIP = "skip"


@dataclass(frozen=True)
class StepClauses:
    """Optional clauses of one accessibility step sentence.

    List-valued clauses keep their raw comma-separated text; splitting happens
    when the clauses are applied to a matcher.
    """

    negate: bool = False
    inclusion: Optional[str] = None
    exclusion: Optional[str] = None
    tags: Optional[str] = None
    rules: Optional[str] = None
    rules_mode: Optional[RulesMode] = None
    options: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.rules is None) != (self.rules_mode is None):
            raise ValueError("rules and rules_mode must be given together")

    @classmethod
    def from_groups(cls, groups: Mapping[str, Optional[str]]) -> "StepClauses":
        rules = groups.get("rules")
        rules_mode: Optional[RulesMode] = None
        if rules is not None:
            if groups.get("skipping"):
                rules_mode = RulesMode.SKIP
            elif groups.get("only"):
                rules_mode = RulesMode.ALLOW_ONLY
            else:
                rules_mode = RulesMode.CHECK
        return cls(
            negate=bool(groups.get("negate")),
            inclusion=groups.get("inclusion"),
            exclusion=groups.get("exclusion"),
            tags=groups.get("tags"),
            rules=rules,
            rules_mode=rules_mode,
            options=groups.get("options"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["rules_mode"] = self.rules_mode.value if self.rules_mode else None
        return out


def parse_phrase(sentence: str) -> StepClauses | None:
    """Parse a composite step sentence, or return None when it does not match."""
    m = STEP_PATTERN.fullmatch(sentence)
    if not m:
        return None
    clauses = StepClauses.from_groups(m.groupdict())
    logger.debug("Parsed accessibility step %r -> %r", sentence, clauses)
    return clauses


def split_list(text: str | None) -> List[str]:
    """Split `a, b,c` into `["a", "b", "c"]`. Trailing empty items are dropped."""
    if not text:
        return []
    parts = _LIST_SEPARATOR_RE.split(text)
    while parts and not parts[-1]:
        parts.pop()
    return parts
