from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import CatalogError

logger = logging.getLogger(__name__)

PROBABILITY_EPSILON = 1e-6


class FishTypeSpec(BaseModel):
    """Immutable catalog entry for one fish category."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Category id, e.g. 'common'")
    probability: float = Field(..., ge=0.0, le=1.0, description="Selection probability")
    value: int = Field(..., ge=0, description="Score awarded when caught")
    speed: float = Field(..., ge=0.0, description="Horizontal movement per frame")
    color: str = Field("#FFFFFF", description="Render color as #RRGGBB")

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str) -> str:
        if len(v) != 7 or not v.startswith("#"):
            raise ValueError(f"color must be '#RRGGBB', got {v!r}")
        int(v[1:], 16)
        return v.upper()

    @property
    def rgb(self) -> tuple[int, int, int]:
        return int(self.color[1:3], 16), int(self.color[3:5], 16), int(self.color[5:7], 16)


class FishCatalog(BaseModel):
    """Ordered set of fish categories.

    Catalog order is significant: category selection walks entries in this order
    and the first entry whose cumulative probability reaches the draw wins.
    """

    model_config = ConfigDict(frozen=True)

    fish_types: List[FishTypeSpec]
    default: str = "common"

    @model_validator(mode="after")
    def check_catalog(self) -> "FishCatalog":
        if not self.fish_types:
            raise ValueError("catalog must contain at least one fish type")
        ids = [spec.id for spec in self.fish_types]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate fish type ids in catalog: {ids}")
        if self.default not in ids:
            raise ValueError(f"default category {self.default!r} is not in the catalog")
        total = sum(spec.probability for spec in self.fish_types)
        if abs(total - 1.0) > PROBABILITY_EPSILON:
            raise ValueError(f"fish type probabilities must sum to 1.0, got {total}")
        return self

    def __iter__(self) -> Iterator[FishTypeSpec]:  # type: ignore[override]
        return iter(self.fish_types)

    def __len__(self) -> int:
        return len(self.fish_types)

    def __getitem__(self, category: str) -> FishTypeSpec:
        for spec in self.fish_types:
            if spec.id == category:
                return spec
        raise KeyError(category)

    def ids(self) -> List[str]:
        return [spec.id for spec in self.fish_types]

    @classmethod
    def from_dict(cls, data: Dict) -> "FishCatalog":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Invalid fish catalog: {exc}") from exc


def load_catalog(path: Optional[str | Path] = None) -> FishCatalog:
    """Load the fish catalog from YAML.

    If path is None, loads the embedded default resource at
    pixelpond/config/fish_types.yaml.
    """
    if path is None:
        data = resources.files("pixelpond.config").joinpath("fish_types.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded fish catalog resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("Loaded fish catalog from path: %s", path)

    raw = yaml.safe_load(data) or {}
    catalog = FishCatalog.from_dict(raw)
    logger.info("Fish catalog: %s (default=%s)", catalog.ids(), catalog.default)
    return catalog
