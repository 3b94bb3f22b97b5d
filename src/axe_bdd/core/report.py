from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from axe_bdd.core import config as config_core


def invocation(context: Optional[Dict[str, Any]], options: Dict[str, Any]) -> str:
    ctx = "document" if context is None else json.dumps(context, sort_keys=True)
    return f"Invocation: axe.run({ctx}, {json.dumps(options, sort_keys=True)});"


def _target(node: Dict[str, Any]) -> str:
    target = node.get("target") or []
    return ", ".join(str(t) for t in target) if isinstance(target, list) else str(target)


def _fix_lines(node: Dict[str, Any]) -> List[str]:
    summary = node.get("failureSummary")
    if summary:
        return [line.strip() for line in str(summary).splitlines() if line.strip()]
    lines: List[str] = []
    for key, heading in (("any", "Fix any of the following:"), ("all", "Fix all of the following:")):
        checks = node.get(key) or []
        if checks:
            lines.append(heading)
            lines.extend(f"- {check.get('message', check.get('id', ''))}" for check in checks)
    none_checks = node.get("none") or []
    if none_checks:
        lines.append("Fix all of the following:")
        lines.extend(f"- {check.get('message', check.get('id', ''))}" for check in none_checks)
    return lines


def _violation_block(index: int, violation: Dict[str, Any], node_limit: int) -> List[str]:
    impact = violation.get("impact") or "unknown"
    lines = [f"{index}) {violation.get('id', '?')}: {violation.get('help', '')} ({impact})"]
    if violation.get("helpUrl"):
        lines.append(f"    {violation['helpUrl']}")
    nodes = violation.get("nodes") or []
    for node in nodes[:node_limit]:
        lines.append(f"    Selector: {_target(node)}")
        if node.get("html"):
            lines.append(f"    HTML: {node['html']}")
        lines.extend(f"    {line}" for line in _fix_lines(node))
    hidden = len(nodes) - node_limit
    if hidden > 0:
        lines.append(f"    ... and {hidden} more node(s)")
    return lines


def failure_message(
    violations: List[Dict[str, Any]],
    *,
    context: Optional[Dict[str, Any]],
    options: Dict[str, Any],
) -> str:
    node_limit = config_core.report_node_limit()
    noun = "violation" if len(violations) == 1 else "violations"
    lines = [f"Found {len(violations)} accessibility {noun}:", ""]
    for i, violation in enumerate(violations, start=1):
        lines.extend(_violation_block(i, violation, node_limit))
        lines.append("")
    lines.append(invocation(context, options))
    return "\n".join(lines)


def failure_message_when_negated(*, context: Optional[Dict[str, Any]], options: Dict[str, Any]) -> str:
    return "\n".join(
        [
            "Expected to find accessibility violations. None were detected.",
            "",
            invocation(context, options),
        ]
    )
