from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class AccessibilityCheckConfig:
    """What one axe run is restricted to.

    `rules_only` is an allow-list (axe `runOnly` of type rule), `rules_skipped`
    a deny-list and `rules_checked` rules force-enabled on top of the default set.
    """

    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    rules_only: List[str] = field(default_factory=list)
    rules_skipped: List[str] = field(default_factory=list)
    rules_checked: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def is_unrestricted(self) -> bool:
        return not (
            self.include
            or self.exclude
            or self.tags
            or self.rules_only
            or self.rules_skipped
            or self.rules_checked
            or self.options
        )

    def context(self) -> Optional[Dict[str, List[List[str]]]]:
        """First argument of `axe.run`; None means the whole document."""
        if not self.include and not self.exclude:
            return None
        out: Dict[str, List[List[str]]] = {}
        if self.include:
            out["include"] = [[selector] for selector in self.include]
        if self.exclude:
            out["exclude"] = [[selector] for selector in self.exclude]
        return out

    def run_options(self) -> Dict[str, Any]:
        """Second argument of `axe.run`. Free-form options are merged last, verbatim."""
        out: Dict[str, Any] = {}
        if self.rules_only:
            if self.tags:
                logger.warning(
                    "Both tags %s and an exclusive rule list %s were given; axe runs the rules only",
                    self.tags,
                    self.rules_only,
                )
            out["runOnly"] = {"type": "rule", "values": list(self.rules_only)}
        elif self.tags:
            out["runOnly"] = {"type": "tag", "values": list(self.tags)}

        rules: Dict[str, Dict[str, bool]] = {}
        for rule in self.rules_checked:
            rules[rule] = {"enabled": True}
        for rule in self.rules_skipped:
            rules[rule] = {"enabled": False}
        if rules:
            out["rules"] = rules

        out.update(self.options)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {"context": self.context(), "options": self.run_options()}
