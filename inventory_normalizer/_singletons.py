# inventory_normalizer/_singletons.py
from functools import lru_cache

from .catalog_build import Catalog, load_catalog
from .pipeline import InventoryNormalizer

# lru_cache does not memoize exceptions: a failed load is retried next call.

@lru_cache(maxsize=1)
def get_default_catalog() -> Catalog:
    return load_catalog()

@lru_cache(maxsize=1)
def get_default_normalizer() -> InventoryNormalizer:
    return InventoryNormalizer(get_default_catalog())
