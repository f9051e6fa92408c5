"""In-memory catalog with a built-in default word list."""

from typing import Dict, Iterable, List, Optional

from passplay.catalog.base import RoleCatalog, validate_category
from passplay.catalog.types import Category, WordPair
from passplay.core.exceptions import CatalogError


DEFAULT_TROLL_WORDS = [
    "Banana", "Toilet Paper", "Unicorn", "Traffic Cone", "Rubber Duck",
    "Disco Ball", "Sock Puppet", "Lawn Gnome", "Bubble Wrap", "Pineapple Pizza",
]

DEFAULT_CATEGORIES = [
    Category(
        id="animals", name="Animals", emoji="🐾",
        word_pairs=[
            WordPair("Lion", "Tiger"), WordPair("Dog", "Wolf"), WordPair("Dolphin", "Shark"),
            WordPair("Horse", "Donkey"), WordPair("Eagle", "Hawk"), WordPair("Frog", "Toad"),
            WordPair("Rabbit", "Hare"), WordPair("Penguin", "Puffin"),
        ],
    ),
    Category(
        id="food", name="Food", emoji="🍕",
        word_pairs=[
            WordPair("Pizza", "Focaccia"), WordPair("Sushi", "Sashimi"), WordPair("Burger", "Sandwich"),
            WordPair("Pancake", "Waffle"), WordPair("Ice Cream", "Frozen Yogurt"),
            WordPair("Hummus", "Tahini"), WordPair("Falafel", "Meatball"), WordPair("Soup", "Stew"),
        ],
    ),
    Category(
        id="places", name="Places", emoji="📍",
        word_pairs=[
            WordPair("Beach", "Lake"), WordPair("Airport", "Train Station"), WordPair("Hospital", "Clinic"),
            WordPair("Library", "Bookstore"), WordPair("Cinema", "Theater"), WordPair("Zoo", "Safari"),
            WordPair("Gym", "Stadium"), WordPair("Castle", "Palace"),
        ],
    ),
    Category(
        id="objects", name="Everyday Objects", emoji="🧰",
        word_pairs=[
            WordPair("Umbrella", "Raincoat"), WordPair("Pillow", "Blanket"), WordPair("Fork", "Spoon"),
            WordPair("Phone", "Tablet"), WordPair("Mirror", "Window"), WordPair("Candle", "Lamp"),
            WordPair("Backpack", "Suitcase"), WordPair("Key"),
        ],
    ),
]


class InMemoryCatalog(RoleCatalog):
    """Catalog backed by plain Python objects."""
    
    def __init__(
        self,
        categories: Optional[Iterable[Category]] = None,
        troll_words: Optional[Iterable[str]] = None,
        validate: bool = True,
    ):
        """Initialize catalog.
        
        Args:
            categories: Categories to serve (defaults to the built-in list)
            troll_words: Troll-word pool (defaults to the built-in list)
            validate: Reject categories that cannot be played
        """
        if categories is None:
            categories = DEFAULT_CATEGORIES
        if troll_words is None:
            troll_words = DEFAULT_TROLL_WORDS
        
        self._categories: Dict[str, Category] = {}
        for category in categories:
            if validate:
                validate_category(category)
            if category.id in self._categories:
                raise CatalogError(f"Duplicate category id: {category.id}")
            self._categories[category.id] = category
        
        troll_words = list(troll_words)
        invalid = [w for w in troll_words if not isinstance(w, str)]
        if invalid:
            raise CatalogError("Troll words must be strings", details={"invalid": invalid})
        self._troll_words = [w.strip() for w in troll_words if w.strip()]
    
    def get_category(self, category_id: str) -> Category:
        if category_id not in self._categories:
            raise CatalogError(
                f"Category '{category_id}' not found",
                details={"available": self.list_ids()}
            )
        return self._categories[category_id]
    
    def get_troll_words(self) -> List[str]:
        return list(self._troll_words)
    
    def list_categories(self) -> List[Category]:
        return list(self._categories.values())
    
    def list_ids(self) -> List[str]:
        return list(self._categories.keys())
