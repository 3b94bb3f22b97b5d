from __future__ import annotations

import importlib.util
import logging

import typer
from playwright.sync_api import Error as PlaywrightError, sync_playwright

from axe_bdd import __version__
from axe_bdd.core import config as config_core, envelope, phrases
from axe_bdd.core.clauses import STEP_PATTERN_TEXT
from axe_bdd.core.step import AccessibilityStep, MalformedOptionsError, NotAccessibleError, build_matcher

app = typer.Typer(add_completion=False, help="axe-bdd - accessibility steps for pytest-bdd")


def _emit(out: dict) -> None:
    typer.echo(envelope.dumps(out))
    if out.get("ok") is True:
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


def _trim(text: str, limit: int = 4000) -> str:
    return text if len(text) <= limit else text[:limit]


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log step parsing and axe invocations")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def version(json_output: bool = typer.Option(False, "--json", help="Output JSON envelope")):
    if json_output:
        _emit(envelope.ok(command="version", data={"version": __version__}))
    typer.echo(f"axe-bdd {__version__}")


@app.command()
def parse(
    sentence: str = typer.Argument(..., help='e.g. the page should be accessible within "#main"'),
    json_output: bool = typer.Option(True, "--json"),
):
    """Show how a step sentence is parsed and what axe would be run with. No browser is started."""
    try:
        clauses = phrases.match_phrase(sentence)
        accessibility = build_matcher(clauses)
        out = envelope.ok(
            command="parse",
            data={"sentence": sentence, "clauses": clauses.to_dict(), **accessibility.config.to_dict()},
        )
    except phrases.UnrecognizedPhraseError as exc:
        out = envelope.err(
            command="parse",
            error_type="UNRECOGNIZED_PHRASE",
            message=str(exc),
            details={"sentence": sentence},
        )
    except MalformedOptionsError as exc:
        out = envelope.err(
            command="parse",
            error_type="MALFORMED_OPTIONS",
            message=str(exc),
            details={"sentence": sentence, "options": exc.text},
        )
    _emit(out)


@app.command()
def steps(json_output: bool = typer.Option(True, "--json")):
    """List every step sentence shape the plugin registers."""
    fixed = [
        {"negate": phrase.negate, "scope": phrase.scope, "extra": phrase.extra, "pattern": phrase.pattern}
        for phrase in phrases.FIXED_PHRASES
    ]
    _emit(envelope.ok(command="steps", data={"composite": STEP_PATTERN_TEXT, "fixed": fixed}))


@app.command()
def check(
    sentence: str = typer.Argument(..., help='e.g. the page should be accessible according to: wcag2a'),
    url: str = typer.Option(..., "--url", help="Page to load before running axe"),
    timeout_ms: int = typer.Option(30_000, "--timeout-ms", min=1),
    json_output: bool = typer.Option(True, "--json"),
):
    """Load a URL in headless Chromium and run one accessibility step against it."""
    details = {"sentence": sentence, "url": url}
    try:
        clauses = phrases.match_phrase(sentence)
        build_matcher(clauses)
        config_core.report_node_limit()
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                page = browser.new_page()
                page.goto(url, wait_until="load", timeout=timeout_ms)
                AccessibilityStep().execute(page, clauses)
            finally:
                browser.close()
        out = envelope.ok(command="check", data={**details, "clauses": clauses.to_dict(), "passed": True})
    except phrases.UnrecognizedPhraseError as exc:
        out = envelope.err(command="check", error_type="UNRECOGNIZED_PHRASE", message=str(exc), details=details)
    except MalformedOptionsError as exc:
        out = envelope.err(command="check", error_type="MALFORMED_OPTIONS", message=str(exc), details=details)
    except ValueError as exc:
        out = envelope.err(command="check", error_type="INVALID_ARGUMENT", message=str(exc), details=details)
    except NotAccessibleError as exc:
        out = envelope.err(
            command="check",
            error_type="NOT_ACCESSIBLE",
            message=_trim(str(exc)),
            details={**details, "violations": [v.get("id") for v in exc.outcome.violations]},
        )
    except PlaywrightError as exc:
        out = envelope.err(
            command="check",
            error_type="BACKEND_FAILED",
            message="browser failed while loading the page or running axe",
            details={**details, "error": _trim(str(exc))},
        )
    _emit(out)


@app.command()
def doctor(json_output: bool = typer.Option(True, "--json")):
    checks: list[dict] = []

    path = config_core.config_path()
    config_details: dict = {"path": str(path), "exists": path.exists()}
    try:
        config_core.reset_config_cache()
        config_details["page_fixtures"] = list(config_core.page_fixture_names())
        config_details["node_limit"] = config_core.report_node_limit()
    except ValueError as exc:
        config_details["error"] = str(exc)
        checks.append({"name": "config", "ok": False, "details": config_details})
    else:
        checks.append({"name": "config", "ok": True, "details": config_details})

    for module in ("axe_playwright_python", "playwright", "pytest_bdd", "yaml"):
        found = importlib.util.find_spec(module) is not None
        checks.append({"name": f"module.{module}", "ok": found, "details": {"module": module}})

    _emit(envelope.ok(command="doctor", data={"checks": checks}))


if __name__ == "__main__":
    app()
