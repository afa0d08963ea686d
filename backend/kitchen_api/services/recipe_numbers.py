"""
Human-readable recipe numbers: RCP-<year>-<seq>.

The sequence restarts at 1 every calendar year and is zero-padded to three
digits (it keeps growing past 999: RCP-2026-1000).
"""

import re
from datetime import date

from shared.config.constants import RecipeNumbering

_RECIPE_NO = re.compile(rf"^{RecipeNumbering.PREFIX}-(\d{{4}})-(\d+)$")


def format_recipe_no(year: int, sequence: int) -> str:
    return f"{RecipeNumbering.PREFIX}-{year}-{sequence:0{RecipeNumbering.SEQUENCE_WIDTH}d}"


def next_recipe_no(last_recipe_no: str | None, year: int | None = None) -> str:
    """
    Number following the most recently created recipe.

    A last number from another year, a missing one, or one that does not
    follow the RCP-YYYY-NNN pattern starts the sequence at 1.

        next_recipe_no("RCP-2026-007", 2026)  # "RCP-2026-008"
        next_recipe_no("RCP-2025-120", 2026)  # "RCP-2026-001"
    """
    year = year or date.today().year
    sequence = 1

    if last_recipe_no:
        match = _RECIPE_NO.match(last_recipe_no.strip())
        if match and int(match.group(1)) == year:
            sequence = int(match.group(2)) + 1

    return format_recipe_no(year, sequence)
