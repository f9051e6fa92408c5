"""Word catalogs consumed by the session engine."""

from passplay.catalog.base import RoleCatalog, parse_word_pairs, validate_category
from passplay.catalog.memory import InMemoryCatalog, DEFAULT_CATEGORIES, DEFAULT_TROLL_WORDS
from passplay.catalog.types import Category, WordPair
from passplay.catalog.yaml_catalog import YamlCatalog, catalog_from_dict

__all__ = [
    "RoleCatalog",
    "InMemoryCatalog",
    "YamlCatalog",
    "Category",
    "WordPair",
    "DEFAULT_CATEGORIES",
    "DEFAULT_TROLL_WORDS",
    "catalog_from_dict",
    "parse_word_pairs",
    "validate_category",
]
