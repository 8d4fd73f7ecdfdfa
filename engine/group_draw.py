"""
Group Draw

Splits the six competing units into two groups of three.
"""

import logging
import random
from typing import Optional, Sequence

from config import DRAW_SETTINGS
from engine.errors import InvalidInputError

logger = logging.getLogger(__name__)


def validate_competitors(competitors: Sequence[str]) -> list[str]:
    """Check for exactly six distinct, non-empty competitor ids."""
    expected = DRAW_SETTINGS.competitors_per_tournament
    ids = [str(c).strip() for c in competitors]

    if len(ids) != expected:
        raise InvalidInputError(f"Expected {expected} competitors, got {len(ids)}")
    if any(not c for c in ids):
        raise InvalidInputError("Competitor ids cannot be empty")
    if len(set(ids)) != len(ids):
        raise InvalidInputError(f"Competitor ids must be distinct: {ids}")

    return ids


def assign_groups(
    competitors: Sequence[str],
    rng: Optional[random.Random] = None
) -> tuple[list[str], list[str]]:
    """
    Draw two groups of three from six competitors.

    The six are shuffled and then dealt one at a time: once either group is
    full the rest go to the other group, otherwise a coin flip decides.
    Every 3/3 split can come out, but the splits are not equally likely.

    Args:
        competitors: Six distinct competitor ids
        rng: Random source (seed it for reproducible draws)

    Returns:
        (group_a, group_b), each a list of three ids in draw order
    """
    ids = validate_competitors(competitors)
    rng = rng or random.Random()
    size = DRAW_SETTINGS.group_size

    shuffled = list(ids)
    rng.shuffle(shuffled)

    group_a: list[str] = []
    group_b: list[str] = []
    for competitor in shuffled:
        if len(group_a) == size:
            group_b.append(competitor)
        elif len(group_b) == size:
            group_a.append(competitor)
        elif rng.random() < 0.5:
            group_a.append(competitor)
        else:
            group_b.append(competitor)

    logger.debug("Group draw: A=%s B=%s", group_a, group_b)
    return group_a, group_b
