from __future__ import annotations

import logging
from typing import Optional

from ..core.rng import RNG
from .catalog import FishCatalog

logger = logging.getLogger(__name__)


def select_category(catalog: FishCatalog, rng: Optional[RNG] = None) -> str:
    """Pick a fish category by weighted random draw.

    Draws u in [0, 1) and walks the catalog in order, returning the first
    category whose cumulative probability is >= u. If floating-point drift
    leaves the cumulative mass just short of the draw, the catalog's default
    category is returned instead of failing.
    """
    rng = rng or RNG()
    draw = rng.random()
    cumulative = 0.0
    for spec in catalog:
        cumulative += spec.probability
        if draw <= cumulative:
            return spec.id
    logger.debug("Draw %.17f exceeded cumulative mass %.17f; using default %r", draw, cumulative, catalog.default)
    return catalog.default
