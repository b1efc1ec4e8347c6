from .catalog import FishCatalog, FishTypeSpec, load_catalog
from .probability import select_category

__all__ = ["FishCatalog", "FishTypeSpec", "load_catalog", "select_category"]
