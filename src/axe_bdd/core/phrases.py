"""Fixed-phrase accessibility steps.

Each phrase is one literal sentence shape such as
`the page should not be accessible within "#main" for tags "wcag2a"`.
They cover the same configuration surface as the composite step in
`axe_bdd.core.clauses` and build the same `StepClauses`, so a sentence gives
the same axe invocation and verdict whichever pattern recognized it.
"""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from axe_bdd.core import clauses as clauses_core
from axe_bdd.core import engine
from axe_bdd.core.clauses import RulesMode, StepClauses
from axe_bdd.core.step import AccessibilityStep

logger = logging.getLogger(__name__)

_QUOTED = '"(?P<{name}>[^"]*)"'
# Options are YAML and may hold double quotes themselves.
_QUOTED_OPTIONS = '"(?P<options>.*?)"'

# (label, regex fragment) per optional scope and extra clause.
_SCOPES: Tuple[Tuple[str, str], ...] = (
    ("", ""),
    ("within", " within " + _QUOTED.format(name="inclusion")),
    ("excluding", " excluding " + _QUOTED.format(name="exclusion")),
    (
        "within+excluding",
        " within " + _QUOTED.format(name="inclusion") + " excluding " + _QUOTED.format(name="exclusion"),
    ),
)
_EXTRAS: Tuple[Tuple[str, str], ...] = (
    ("", ""),
    ("tags", " for tags? " + _QUOTED.format(name="tags")),
    ("rules", " for rules? " + _QUOTED.format(name="rules")),
    ("options", " with options " + _QUOTED_OPTIONS),
)

_GROUP_RE = re.compile(r"\(\?P<(?P<name>\w+)>[^)]*\)")
_PLACEHOLDERS = {
    "inclusion": "<selector>",
    "exclusion": "<selector>",
    "tags": "<tags>",
    "rules": "<rules>",
    "options": "<options>",
}


class UnrecognizedPhraseError(LookupError):
    def __init__(self, sentence: str) -> None:
        super().__init__(f"No accessibility step matches: {sentence!r}")
        self.sentence = sentence


@dataclass(frozen=True)
class FixedPhrase:
    negate: bool
    scope: str
    extra: str
    pattern: str

    @property
    def example(self) -> str:
        """Human-readable form, e.g. `the page should be accessible within "<selector>"`."""
        text = self.pattern.strip("^$").replace("s?", "(s)")
        return _GROUP_RE.sub(lambda m: _PLACEHOLDERS[m.group("name")], text)

    def build(self, groups: Dict[str, Optional[str]]) -> StepClauses:
        rules = groups.get("rules")
        return StepClauses(
            negate=self.negate,
            inclusion=groups.get("inclusion"),
            exclusion=groups.get("exclusion"),
            tags=groups.get("tags"),
            rules=rules,
            rules_mode=RulesMode.ALLOW_ONLY if rules is not None else None,
            options=groups.get("options"),
        )

    def parse(self, sentence: str) -> StepClauses | None:
        m = re.fullmatch(self.pattern, sentence)
        if not m:
            return None
        return self.build(m.groupdict())


def _build_table() -> List[FixedPhrase]:
    table: List[FixedPhrase] = []
    for (extra, extra_re), negate, (scope, scope_re) in itertools.product(_EXTRAS, (False, True), _SCOPES):
        head = "the page should not be accessible" if negate else "the page should be accessible"
        table.append(FixedPhrase(negate=negate, scope=scope, extra=extra, pattern=f"^{head}{scope_re}{extra_re}$"))
    return table


FIXED_PHRASES: Tuple[FixedPhrase, ...] = tuple(_build_table())


def match_phrase(sentence: str) -> StepClauses:
    """Parse a sentence with the composite pattern, falling back to the fixed phrases."""
    parsed = clauses_core.parse_phrase(sentence)
    if parsed is not None:
        return parsed
    for phrase in FIXED_PHRASES:
        parsed = phrase.parse(sentence)
        if parsed is not None:
            logger.debug("Fixed phrase %r matched %r", phrase.pattern, sentence)
            return parsed
    raise UnrecognizedPhraseError(sentence)


def run_phrase(page: Any, sentence: str, runner: engine.Runner | None = None) -> None:
    AccessibilityStep(runner).execute(page, match_phrase(sentence))
