from __future__ import annotations

import json
import logging
from typing import Any, Dict

import yaml

from axe_bdd.core import engine
from axe_bdd.core.clauses import RulesMode, StepClauses, split_list
from axe_bdd.core.matcher import BeAccessible, MatchOutcome

logger = logging.getLogger(__name__)


class MalformedOptionsError(ValueError):
    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Malformed accessibility options {text!r}: {reason}")
        self.text = text
        self.reason = reason


class NotAccessibleError(AssertionError):
    def __init__(self, message: str, outcome: MatchOutcome) -> None:
        super().__init__(message)
        self.outcome = outcome


def load_options(text: str) -> Dict[str, Any]:
    """Deserialize an options blob (YAML, so JSON works too) into a mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedOptionsError(text, str(exc)) from exc
    if not isinstance(data, dict):
        raise MalformedOptionsError(text, f"expected a mapping, got {type(data).__name__}")
    # axe receives options as JSON, so YAML-only values (dates, mixed key types) are rejected here.
    try:
        json.dumps(data, sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise MalformedOptionsError(text, f"not representable as JSON: {exc}") from exc
    logger.debug("Parsed accessibility options %r", data)
    return data


def build_matcher(clauses: StepClauses, runner: engine.Runner | None = None) -> BeAccessible:
    """Apply every clause to a fresh matcher. Options are parsed before anything runs."""
    accessibility = BeAccessible(runner)
    if clauses.inclusion is not None:
        accessibility.within(split_list(clauses.inclusion))
    if clauses.exclusion is not None:
        accessibility.excluding(split_list(clauses.exclusion))
    if clauses.tags is not None:
        accessibility.according_to(split_list(clauses.tags))
    if clauses.rules is not None:
        rules = split_list(clauses.rules)
        if clauses.rules_mode is RulesMode.ALLOW_ONLY:
            accessibility.checking_only(rules)
        elif clauses.rules_mode is RulesMode.SKIP:
            accessibility.skipping(rules)
        else:
            accessibility.checking(rules)
    if clauses.options is not None:
        accessibility.with_options(load_options(clauses.options))
    return accessibility


class AccessibilityStep:
    """Runs one parsed accessibility step against a page and asserts on the result.

    Failing steps raise `NotAccessibleError` (an `AssertionError`) so any test
    runner reports them as ordinary test failures.
    """

    def __init__(self, runner: engine.Runner | None = None) -> None:
        self._runner = runner

    def execute(self, page: Any, clauses: StepClauses) -> None:
        accessibility = build_matcher(clauses, self._runner)
        if clauses.negate:
            self._refute(page, accessibility)
        else:
            self._assert(page, accessibility)

    def _assert(self, page: Any, accessibility: BeAccessible) -> None:
        if not accessibility.matches(page):
            raise NotAccessibleError(accessibility.failure_message(), accessibility.outcome)

    def _refute(self, page: Any, accessibility: BeAccessible) -> None:
        if accessibility.matches(page):
            raise NotAccessibleError(accessibility.failure_message_when_negated(), accessibility.outcome)
