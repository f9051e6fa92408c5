"""Type definitions for word catalogs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class WordPair:
    """A primary word and its confusable twin.
    
    ``word_b`` equals ``word_a`` when the pair has no distinct twin.
    """
    word_a: str
    word_b: str = ""
    
    @property
    def twin(self) -> str:
        """The twin word, falling back to the primary word."""
        twin = self.word_b.strip()
        return twin if twin else self.word_a
    
    @property
    def has_twin(self) -> bool:
        return self.twin != self.word_a
    
    def to_dict(self) -> Dict[str, str]:
        return {"word_a": self.word_a, "word_b": self.twin}


@dataclass
class Category:
    """A named set of word pairs."""
    id: str
    name: str
    word_pairs: List[WordPair] = field(default_factory=list)
    emoji: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "word_pairs": [pair.to_dict() for pair in self.word_pairs],
        }
