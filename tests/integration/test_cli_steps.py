from __future__ import annotations

import re

from tests.integration._cli import run


def test_steps_lists_composite_and_fixed_phrases():
    out = run("steps")
    data = out["data"]
    assert re.fullmatch(data["composite"], "the page should be accessible skipping: region")
    assert len(data["fixed"]) == 32
    assert {"negate", "scope", "extra", "pattern"} <= set(data["fixed"][0])
