from __future__ import annotations

import pytest

from axe_bdd.core import phrases
from axe_bdd.core.clauses import RulesMode, parse_phrase
from axe_bdd.core.step import NotAccessibleError, build_matcher
from tests._fakes import FakeAxeRunner, FakePage


def test_table_covers_every_supported_combination() -> None:
    assert len(phrases.FIXED_PHRASES) == 32
    assert len({p.pattern for p in phrases.FIXED_PHRASES}) == 32
    combos = {(p.negate, p.scope, p.extra) for p in phrases.FIXED_PHRASES}
    assert (True, "within+excluding", "options") in combos
    assert (False, "", "") in combos


def test_for_rule_is_an_allow_list() -> None:
    clauses = phrases.match_phrase('the page should be accessible for rule "image-alt"')
    assert clauses.rules == "image-alt"
    assert clauses.rules_mode is RulesMode.ALLOW_ONLY


def test_quoted_options_may_contain_quotes() -> None:
    clauses = phrases.match_phrase('the page should be accessible with options "{runOnly: {type: "tag", values: [wcag2a]}}"')
    assert clauses.options == '{runOnly: {type: "tag", values: [wcag2a]}}'


@pytest.mark.parametrize(
    ("fixed", "composite"),
    [
        (
            'the page should be accessible within "#main" for tags "wcag2a, wcag2aa"',
            'the page should be accessible within "#main" according to: wcag2a, wcag2aa',
        ),
        (
            'the page should not be accessible excluding "#ads" for rules "image-alt,label"',
            'the page should not be accessible excluding "#ads" checking only: image-alt,label',
        ),
        (
            'the page should be accessible within "#a" excluding "#b" with options "{iframes: false}"',
            'the page should be accessible within "#a" excluding "#b" with options: {iframes: false}',
        ),
    ],
)
def test_fixed_phrases_build_the_same_config_as_the_composite_step(fixed: str, composite: str) -> None:
    from_fixed = phrases.match_phrase(fixed)
    from_composite = parse_phrase(composite)
    assert from_composite is not None
    assert parse_phrase(fixed) is None
    assert from_fixed == from_composite
    assert build_matcher(from_fixed).config == build_matcher(from_composite).config


def test_every_fixed_phrase_parses_its_example() -> None:
    values = {"<selector>": "#main", "<tags>": "wcag2a", "<rules>": "image-alt", "<options>": "{iframes: false}"}
    for phrase in phrases.FIXED_PHRASES:
        sentence = phrase.example.replace("(s)", "s")
        for placeholder, value in values.items():
            sentence = sentence.replace(placeholder, value)
        clauses = phrase.parse(sentence)
        assert clauses is not None, sentence
        assert clauses.negate is phrase.negate


def test_match_phrase_prefers_composite_pattern() -> None:
    assert phrases.match_phrase("the page should be accessible skipping: region").rules_mode is RulesMode.SKIP


def test_unrecognized_phrase() -> None:
    with pytest.raises(phrases.UnrecognizedPhraseError) as excinfo:
        phrases.match_phrase("the page should look nice")
    assert excinfo.value.sentence == "the page should look nice"
    assert isinstance(excinfo.value, LookupError)


def test_run_phrase_uses_the_shared_executor() -> None:
    runner = FakeAxeRunner()
    page = FakePage()
    page.add("image-alt", "#main img")
    phrases.run_phrase(page, 'the page should be accessible excluding "#main"', runner=runner)
    with pytest.raises(NotAccessibleError):
        phrases.run_phrase(page, 'the page should be accessible for rule "image-alt"', runner=runner)
    assert len(runner.calls) == 2
