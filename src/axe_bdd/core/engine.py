from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from axe_playwright_python.sync_playwright import Axe

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def run(self, page: Any, context: Optional[Dict[str, Any]], options: Dict[str, Any]) -> Dict[str, Any]:
        ...


class AxeRunner:
    """Runs axe-core inside a Playwright page and returns the raw axe response."""

    def __init__(self, axe: Axe | None = None) -> None:
        self._axe = axe or Axe()

    def run(self, page: Any, context: Optional[Dict[str, Any]], options: Dict[str, Any]) -> Dict[str, Any]:
        # axe-playwright-python injects axe through Page.evaluate.
        if not callable(getattr(page, "evaluate", None)):
            raise TypeError(f"cannot run axe in a {type(page).__name__}; a Playwright Page is required")
        logger.debug("axe.run context=%r options=%r", context, options)
        results = self._axe.run(page, context=context, options=options or None)
        response = results.response
        if not isinstance(response, dict):
            raise TypeError(f"axe returned {type(response).__name__}, expected a results object")
        return response
