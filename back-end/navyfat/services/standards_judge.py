"""
Standards Judge Service
=======================
Judges an estimated body fat percentage against a service standard (preset)
from the StandardsCatalog.

ALGORITHM:
  1. Find the preset by ID              -> ConfigError if missing
  2. Take the FIRST limit, in catalog order, whose sex matches and whose
     [ageMin, ageMax] range (inclusive) contains the age
  3. No match  -> out_of_range=True, nothing else populated
     Match     -> passed = body_fat <= limit   (exactly at the limit PASSES)
                  margin = limit − body_fat    (positive = headroom,
                                                negative = amount over)

First-match-wins is deliberate: if a document ever has overlapping brackets,
the earlier one decides, so the result depends only on document order.
"""

import logging

from navyfat.core.standards import StandardsCatalog
from navyfat.models import JudgementResult, Sex

logger = logging.getLogger(__name__)


def judge(
    catalog: StandardsCatalog,
    sex: Sex,
    age: int,
    body_fat_pct: float,
    preset_id: str,
) -> JudgementResult:
    """
    Judge `body_fat_pct` against preset `preset_id`.

    Raises:
        ConfigError: If the catalog has no preset with that ID.
    """
    preset = catalog.get_preset(preset_id)

    limit = next((lim for lim in preset.limits if lim.matches(sex, age)), None)

    if limit is None:
        logger.info(
            f"{preset_id}: no bracket for sex={Sex(sex).value}, age={age} -> out of range"
        )
        return JudgementResult(preset_id=preset_id, out_of_range=True)

    passed = body_fat_pct <= limit.limit_pct
    margin = limit.limit_pct - body_fat_pct

    logger.info(
        f"{preset_id}: bracket {limit.age_min}-{limit.age_max} limit={limit.limit_pct}% "
        f"body_fat={body_fat_pct:.2f}% -> {'pass' if passed else 'fail'} "
        f"(margin={margin:+.2f})"
    )
    return JudgementResult(
        preset_id=preset_id,
        out_of_range=False,
        passed=passed,
        limit_pct=limit.limit_pct,
        margin_pct=margin,
    )


def judgement_status(result: JudgementResult) -> str:
    """
    Short status text for a judgement.

    Examples: "Out of range", "Pass (+4.9%pt)", "Pass (0.0%pt)", "Fail (-1.2%pt)"
    """
    if result.out_of_range:
        return "Out of range"
    sign = "+" if result.margin_pct > 0 else ""
    verdict = "Pass" if result.passed else "Fail"
    return f"{verdict} ({sign}{result.margin_pct:.1f}%pt)"


def standards_table(
    catalog: StandardsCatalog,
    sex: Sex | None = None,
    age: int | None = None,
) -> list[dict]:
    """
    Flatten every preset's limits into table rows, in catalog order.

    When both `sex` and `age` are given, rows whose bracket covers the subject
    are flagged `highlighted` so the UI can mark them.
    """
    rows = []
    for preset in catalog.presets:
        for limit in preset.limits:
            highlighted = sex is not None and age is not None and limit.matches(sex, age)
            rows.append({
                "preset_id": preset.id,
                "service": preset.service,
                "sex": limit.sex,
                "age_min": limit.age_min,
                "age_max": limit.age_max,
                "limit_pct": limit.limit_pct,
                "highlighted": highlighted,
            })
    return rows


def source_info(catalog: StandardsCatalog) -> str:
    """One-line provenance of the loaded standards document."""
    meta = catalog.meta
    return f"{meta.source} (Version: {meta.version}, retrieved: {meta.retrieved_at})"
