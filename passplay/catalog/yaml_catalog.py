"""YAML-backed catalog."""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from passplay.catalog.base import parse_word_pairs
from passplay.catalog.memory import DEFAULT_TROLL_WORDS, InMemoryCatalog
from passplay.catalog.types import Category, WordPair
from passplay.core.exceptions import CatalogError


def _parse_words(raw: Any, category_id: str) -> List[WordPair]:
    """Parse a category's ``words`` entry.
    
    Accepts a block string (one pair per line), a list of ``"a, b"``
    strings, or a list of ``{word_a, word_b}`` mappings.
    """
    if isinstance(raw, str):
        return parse_word_pairs(raw)
    if not isinstance(raw, list):
        raise CatalogError(f"Invalid words for category '{category_id}'")
    
    pairs = []
    for item in raw:
        if isinstance(item, str):
            pairs.extend(parse_word_pairs(item))
        elif isinstance(item, dict) and item.get("word_a"):
            pairs.append(WordPair(str(item["word_a"]).strip(), str(item.get("word_b") or "").strip()))
        else:
            raise CatalogError(
                f"Invalid word entry in category '{category_id}'",
                details={"entry": item}
            )
    return pairs


def catalog_from_dict(data: Dict[str, Any]) -> InMemoryCatalog:
    """Build a catalog from a parsed ``catalog`` section.
    
    Args:
        data: Mapping with ``categories`` and optional ``troll_words``
        
    Returns:
        InMemoryCatalog with the parsed categories
    """
    if not isinstance(data, dict):
        raise CatalogError("Catalog section must be a mapping")
    
    raw_categories = data.get("categories")
    if not raw_categories:
        raise CatalogError("Catalog defines no categories")
    
    if not isinstance(raw_categories, list):
        raise CatalogError("Catalog categories must be a list")
    
    categories = []
    for raw in raw_categories:
        if not isinstance(raw, dict):
            raise CatalogError("Category entry must be a mapping", details={"entry": raw})
        category_id = str(raw.get("id") or "").strip()
        if not category_id:
            raise CatalogError("Category without id", details={"entry": raw})
        categories.append(
            Category(
                id=category_id,
                name=str(raw.get("name") or category_id),
                emoji=str(raw.get("emoji") or ""),
                word_pairs=_parse_words(raw.get("words", []), category_id),
            )
        )
    
    troll_words = data.get("troll_words") or DEFAULT_TROLL_WORDS
    if not isinstance(troll_words, list):
        raise CatalogError("Catalog troll_words must be a list")
    return InMemoryCatalog(categories=categories, troll_words=troll_words)


class YamlCatalog(InMemoryCatalog):
    """Catalog loaded from a YAML file.
    
    The file is either a bare catalog (top-level ``categories``) or a full
    session config with a ``catalog`` section.
    """
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.exists():
            raise CatalogError(f"Catalog file not found: {self.path}")
        
        try:
            with open(self.path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise CatalogError(f"Failed to parse catalog file {self.path}", details={"error": str(e)})
        
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog file {self.path} must contain a mapping")

        section = data.get("catalog", data)
        loaded = catalog_from_dict(section)
        super().__init__(
            categories=loaded.list_categories(),
            troll_words=loaded.get_troll_words(),
        )
