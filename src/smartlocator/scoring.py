from __future__ import annotations

from typing import Iterable

from .models import Locator, PriorityLevel
from .selector_rules import mentions_test_id_attribute
from .tool_profiles import is_role_aware, prefers_test_ids

STABILITY_RANK: dict[str, int] = {"High": 0, "Medium": 1, "Low": 2}

FRONT_WEIGHT = -10.0
TEXT_FRONT_WEIGHT = -5.0
XPATH_PUSHBACK = 5.0
# Keeps generated ids behind every other strategy whatever the tool adjustments are.
DYNAMIC_ID_WEIGHT = 100.0


def tool_weight(locator: Locator, tool: str) -> float:
    """Reinterpret the intrinsic priority of a locator for the given tool."""
    base = float(locator.priority)
    if locator.priority == PriorityLevel.DYNAMIC_ID:
        return DYNAMIC_ID_WEIGHT

    if is_role_aware(tool):
        weight = base
        if locator.priority == PriorityLevel.ROLE:
            weight = FRONT_WEIGHT
        elif locator.priority == PriorityLevel.TEXT_ROLE:
            weight = TEXT_FRONT_WEIGHT
        if locator.method == "xpath":
            weight += XPATH_PUSHBACK
        return weight

    if prefers_test_ids(tool):
        if mentions_test_id_attribute(locator.value):
            return FRONT_WEIGHT
        return base

    if locator.priority == PriorityLevel.ROBUST_ID:
        return FRONT_WEIGHT
    return base


def rank_key(locator: Locator, tool: str) -> tuple[float, int, int]:
    return (
        tool_weight(locator, tool),
        STABILITY_RANK.get(locator.stability, len(STABILITY_RANK)),
        len(locator.value),
    )


def rank_locators(locators: Iterable[Locator], tool: str) -> list[Locator]:
    ranked = list(locators)
    ranked.sort(key=lambda item: rank_key(item, tool))
    return ranked
