"""pytest-bdd step definitions for accessibility checks.

Registered as a pytest plugin (entry point `axe_bdd`), or explicitly with
`pytest_plugins = ["axe_bdd.steps"]`. Feature files can then say:

    Then the page should be accessible
    Then the page should not be accessible within "#main" but excluding "#ads"
    Then the page should be accessible according to: wcag2a, wcag2aa skipping: color-contrast
    Then the page should be accessible for rules "image-alt"

The page handle comes from the first available fixture named in
`[steps] page_fixtures` (default: page). It must be a Playwright `Page`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import pytest
from pytest_bdd import parsers, then

from axe_bdd.core import config as config_core
from axe_bdd.core import engine
from axe_bdd.core.clauses import STEP_PATTERN_TEXT, StepClauses
from axe_bdd.core.phrases import FIXED_PHRASES
from axe_bdd.core.step import AccessibilityStep


class ClauseParser(parsers.re):
    """Regex step parser that hands the step function one `StepClauses` argument."""

    def __init__(self, pattern: str, build: Callable[[Dict[str, Optional[str]]], StepClauses]) -> None:
        super().__init__(pattern)
        self._build = build

    def parse_arguments(self, name: str) -> Dict[str, Any] | None:
        groups = super().parse_arguments(name)
        if groups is None:
            return None
        return {"clauses": self._build(groups)}


@pytest.fixture()
def axe_runner() -> engine.Runner:
    return engine.AxeRunner()


@pytest.fixture()
def accessibility_step(axe_runner: engine.Runner) -> AccessibilityStep:
    return AccessibilityStep(axe_runner)


@pytest.fixture()
def accessibility_page(request: pytest.FixtureRequest) -> Any:
    names = config_core.page_fixture_names()
    for name in names:
        try:
            return request.getfixturevalue(name)
        except pytest.FixtureLookupError:
            continue
    raise LookupError(f"No page fixture available for accessibility steps (tried: {', '.join(names)})")


def _check(clauses: StepClauses, accessibility_step: AccessibilityStep, accessibility_page: Any) -> None:
    accessibility_step.execute(accessibility_page, clauses)


then(ClauseParser(STEP_PATTERN_TEXT, StepClauses.from_groups))(_check)

for _phrase in FIXED_PHRASES:
    then(ClauseParser(_phrase.pattern, _phrase.build))(_check)
