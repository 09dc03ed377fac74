"""Weekly pregnancy tips and size comparisons.

Content lives in ``weekly_content.yaml`` next to this module and is loaded
once per process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

logger = logging.getLogger("herjourney.care.tips")

_CONTENT_PATH = Path(__file__).parent / "weekly_content.yaml"


@dataclass(frozen=True)
class SizeComparison:
    """What the baby is about the size of in a given week."""

    name: str
    description: str


@dataclass
class WeeklyContent:
    """Parsed weekly_content.yaml."""

    tips_by_week: dict[int, list[str]]
    fruit_by_week: dict[int, SizeComparison]
    general_tips: list[str]
    fallback_tip: str
    fallback_fruit: SizeComparison = field(
        default_factory=lambda: SizeComparison("Little one", "Growing beautifully")
    )


def _build_content(raw: dict) -> WeeklyContent:
    fallback = raw.get("fallback_fruit") or {}
    return WeeklyContent(
        tips_by_week={
            int(week): list(tips) for week, tips in (raw.get("tips_by_week") or {}).items()
        },
        fruit_by_week={
            int(week): SizeComparison(name=item["name"], description=item["description"])
            for week, item in (raw.get("fruit_by_week") or {}).items()
        },
        general_tips=list(raw.get("general_tips") or []),
        fallback_tip=raw.get("fallback_tip", ""),
        fallback_fruit=SizeComparison(
            name=fallback.get("name", "Little one"),
            description=fallback.get("description", "Growing beautifully"),
        ),
    )


@lru_cache
def get_weekly_content() -> WeeklyContent:
    """Load and cache the bundled weekly content file."""
    with _CONTENT_PATH.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    content = _build_content(raw)
    logger.info(
        "Loaded weekly content: %d weeks of tips, %d size comparisons",
        len(content.tips_by_week),
        len(content.fruit_by_week),
    )
    return content


def tips_for_week(week: int) -> list[str]:
    """Tips for a gestational week, or a single encouraging fallback tip."""
    content = get_weekly_content()
    tips = content.tips_by_week.get(week)
    if not tips:
        return [content.fallback_tip]
    return list(tips)


def general_tips() -> list[str]:
    """Tips for users who are not pregnant."""
    return list(get_weekly_content().general_tips)
