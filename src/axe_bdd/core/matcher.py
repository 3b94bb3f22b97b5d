from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, List, Optional

from axe_bdd.core import engine, report
from axe_bdd.core.check import AccessibilityCheckConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOutcome:
    matches: bool
    failure_message: str
    failure_message_when_negated: str
    results: Dict[str, Any] = field(default_factory=dict)

    @property
    def violations(self) -> List[Dict[str, Any]]:
        return list(self.results.get("violations") or [])


def _as_list(values: str | Iterable[str]) -> List[str]:
    if isinstance(values, str):
        return [values]
    return [str(v) for v in values]


class BeAccessible:
    """Fluent accessibility matcher.

    Every configuration method returns the matcher itself so calls chain:

        BeAccessible().within("#main").skipping("color-contrast").matches(page)
    """

    def __init__(self, runner: engine.Runner | None = None) -> None:
        self.config = AccessibilityCheckConfig()
        self._runner = runner
        self._outcome: Optional[MatchOutcome] = None

    def within(self, selectors: str | Iterable[str]) -> "BeAccessible":
        self.config.include.extend(_as_list(selectors))
        return self

    def excluding(self, selectors: str | Iterable[str]) -> "BeAccessible":
        self.config.exclude.extend(_as_list(selectors))
        return self

    def according_to(self, tags: str | Iterable[str]) -> "BeAccessible":
        self.config.tags.extend(_as_list(tags))
        return self

    for_tag = according_to

    def checking(self, rules: str | Iterable[str]) -> "BeAccessible":
        self.config.rules_checked.extend(_as_list(rules))
        return self

    def checking_only(self, rules: str | Iterable[str]) -> "BeAccessible":
        self.config.rules_only.extend(_as_list(rules))
        return self

    for_rule = checking_only

    def skipping(self, rules: str | Iterable[str]) -> "BeAccessible":
        self.config.rules_skipped.extend(_as_list(rules))
        return self

    def with_options(self, options: Dict[str, Any]) -> "BeAccessible":
        if not isinstance(options, dict):
            raise TypeError(f"options must be a mapping, got {type(options).__name__}")
        self.config.options.update(options)
        return self

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        return self._outcome

    def matches(self, page: Any) -> bool:
        runner = self._runner or engine.AxeRunner()
        context = self.config.context()
        options = self.config.run_options()
        results = runner.run(page, context, options)
        violations = list(results.get("violations") or [])
        logger.debug("axe reported %d violation(s)", len(violations))
        self._outcome = MatchOutcome(
            matches=not violations,
            failure_message=report.failure_message(violations, context=context, options=options),
            failure_message_when_negated=report.failure_message_when_negated(context=context, options=options),
            results=results,
        )
        return self._outcome.matches

    def failure_message(self) -> str:
        return self._require_outcome().failure_message

    def failure_message_when_negated(self) -> str:
        return self._require_outcome().failure_message_when_negated

    def _require_outcome(self) -> MatchOutcome:
        if self._outcome is None:
            raise RuntimeError("matches() must be called before reading failure messages")
        return self._outcome
