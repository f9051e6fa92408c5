"""Base catalog interface consumed by the session engine."""

from abc import ABC, abstractmethod
from typing import List

from passplay.catalog.types import Category, WordPair
from passplay.core.exceptions import CatalogError

# Smallest category the custom-category editor accepts
MIN_WORD_PAIRS = 3


class RoleCatalog(ABC):
    """Read-only source of categories and troll words.
    
    The engine only reads from a catalog. Caching, storage and editing are
    the adapter's concern.
    """
    
    @abstractmethod
    def get_category(self, category_id: str) -> Category:
        """Get a category by id.
        
        Raises:
            CatalogError: If the category does not exist
        """
        pass
    
    @abstractmethod
    def get_troll_words(self) -> List[str]:
        """Get the pool of off-category words used in troll rounds."""
        pass
    
    @abstractmethod
    def list_categories(self) -> List[Category]:
        """List all available categories."""
        pass
    
    def has_category(self, category_id: str) -> bool:
        try:
            self.get_category(category_id)
        except CatalogError:
            return False
        return True


def parse_word_pairs(text: str) -> List[WordPair]:
    """Parse word pairs from editor text.
    
    Each non-blank line is either ``"wordA, wordB"`` or a single ``"word"``;
    a single word becomes a pair with no distinct twin.
    
    Args:
        text: Multi-line text, one pair per line
        
    Returns:
        List of WordPair objects
    """
    pairs = []
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = [p.strip() for p in line.split(",")]
        if len(parts) >= 2 and parts[1]:
            pairs.append(WordPair(parts[0], parts[1]))
        else:
            pairs.append(WordPair(parts[0], parts[0]))
    return pairs


def validate_category(category: Category) -> None:
    """Check that a category can be played.
    
    Raises:
        CatalogError: If the category is unnamed or has too few word pairs
    """
    if not category.name.strip():
        raise CatalogError("Category name must not be empty", details={"id": category.id})
    if len(category.word_pairs) < MIN_WORD_PAIRS:
        raise CatalogError(
            f"Category needs at least {MIN_WORD_PAIRS} words",
            details={"id": category.id, "words": len(category.word_pairs)}
        )
    for pair in category.word_pairs:
        if not pair.word_a.strip():
            raise CatalogError("Empty word in category", details={"id": category.id})
