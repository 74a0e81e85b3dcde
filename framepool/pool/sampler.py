"""Asset sampling without replacement.

Two strategies are supported:
- Uniform: every subset of the requested size is equally likely
- Recency-biased: exponential decay on asset age, newer photos weigh more
"""

import logging
import math
import random
from collections.abc import Sequence
from datetime import date, datetime, timezone

from framepool.constants import DAYS_PER_YEAR
from framepool.models import Asset
from framepool.pool.filters import start_of_day

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


def recency_weight(asset: Asset, recency_bias: float, today: date) -> float:
    """
    Weight of an asset under exponential recency decay.

    weight = exp(-bias * days_ago / 365). At bias=1.0 a photo from one year
    ago weighs ~37% of one taken today. Future dates count as today.
    """
    elapsed = start_of_day(today) - asset.effective_date
    days_ago = max(0.0, elapsed.total_seconds() / SECONDS_PER_DAY)
    return math.exp(-recency_bias * days_ago / DAYS_PER_YEAR)


def select_uniform(assets: Sequence[Asset], count: int, rng: random.Random) -> list[Asset]:
    """Pick up to `count` distinct assets uniformly at random, in random order."""
    if count <= 0 or not assets:
        return []
    return rng.sample(list(assets), min(count, len(assets)))


def _last_weighted(candidates: list[tuple[Asset, float]]) -> int:
    for index in range(len(candidates) - 1, -1, -1):
        if candidates[index][1] > 0:
            return index
    return len(candidates) - 1


def select_weighted(
    assets: Sequence[Asset],
    count: int,
    recency_bias: float,
    rng: random.Random,
    today: date,
) -> list[Asset]:
    """
    Weighted random selection without replacement.

    Each round draws a point in [0, remaining weight), walks the candidates
    accumulating weight and takes the first one whose cumulative weight
    reaches the point. The chosen candidate leaves the pool.

    Args:
        assets: Candidate assets
        count: Number of assets to pick
        recency_bias: Decay strength (> 0)
        rng: Random source
        today: Reference date for asset age

    Returns:
        Up to `count` distinct assets
    """
    candidates = [(asset, recency_weight(asset, recency_bias, today)) for asset in assets]
    total_weight = sum(weight for _, weight in candidates)

    selected: list[Asset] = []
    while len(selected) < count and candidates:
        point = rng.random() * total_weight
        cumulative = 0.0
        chosen = None
        for index, (_, weight) in enumerate(candidates):
            cumulative += weight
            if point <= cumulative:
                chosen = index
                break
        if chosen is None:
            # Rounding left point past the last sum; never fall back to a zero weight
            chosen = _last_weighted(candidates)

        asset, weight = candidates.pop(chosen)
        selected.append(asset)
        total_weight -= weight

    return selected


def select_assets(
    assets: Sequence[Asset],
    count: int,
    recency_bias: float | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[Asset]:
    """
    Select up to `count` assets using the configured strategy.

    Negative counts are treated as zero.

    Args:
        assets: Filtered assets to choose from
        count: Number of assets requested
        recency_bias: 0 or None for uniform sampling, > 0 for recency weighting
        rng: Random source (a fresh unseeded generator if None)
        today: Reference date for recency weighting (defaults to today, UTC)

    Returns:
        List of at most min(count, len(assets)) distinct assets
    """
    if count < 0:
        logger.debug(f"Negative asset count requested ({count}), returning none")
        return []

    rng = rng or random.Random()
    bias = recency_bias or 0.0

    if bias == 0:
        return select_uniform(assets, count, rng)

    today = today or datetime.now(timezone.utc).date()
    return select_weighted(assets, count, bias, rng, today)


__all__ = ["recency_weight", "select_assets", "select_uniform", "select_weighted"]
