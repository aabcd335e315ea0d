"""
Question Generator for the Interview Coach engine.

Builds the ordered, duplicate-free question list for a session from the
built-in question bank:
- Single category: shuffled difficulty pool, first N unique questions
- Mixed: round-robin across a shuffled category list
- Short lists are topped up from the whole bank
"""

import random
from typing import Any, Dict, List, Optional, Set

from .question_bank import QUESTION_BANK, QuestionPool
from ..errors import ValidationError
from ..models import Question
from ..utils.config import DEFAULT_DIFFICULTY, MIXED_CATEGORY
from ..utils.logger import setup_logger

logger = setup_logger("question_generator")

FILLER_CATEGORY = "general"


class QuestionGenerator:
    """
    Selects interview questions from a question bank.
    
    The random source is injectable so selection is reproducible in tests.
    """
    
    def __init__(
        self,
        question_bank: Optional[Dict[str, Dict[str, QuestionPool]]] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize question generator.
        
        Args:
            question_bank: {category: {difficulty: [question dicts]}}. Default: built-in bank.
            rng: Random source used for shuffling. Default: unseeded random.Random().
        """
        self.question_bank = question_bank if question_bank is not None else QUESTION_BANK
        self.rng = rng if rng is not None else random.Random()
        
        logger.info(f"QuestionGenerator initialized with categories: {self.categories}")
    
    @property
    def categories(self) -> List[str]:
        return list(self.question_bank.keys())
    
    def generate_questions(self, category: str, difficulty: str, count: int) -> List[Question]:
        """
        Build the question list for one session.
        
        Args:
            category: A bank category or "mixed"
            difficulty: "easy", "medium" or "hard"; falls back to "medium" when the
                category has no pool for it
            count: Number of questions, must be >= 1
        
        Returns:
            Questions with pairwise-distinct text, ordered 0..len-1. The list has
            exactly `count` entries whenever the bank holds that many unique texts.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValidationError(f"Question count must be a positive integer, got {count!r}")
        if category != MIXED_CATEGORY and category not in self.question_bank:
            raise ValidationError(f"Unknown question category: {category!r}")
        
        used: Set[str] = set()
        selected: List[Dict[str, Any]] = []
        
        if category == MIXED_CATEGORY:
            self._select_mixed(difficulty, count, used, selected)
        else:
            for entry in self._shuffled_pool(category, difficulty):
                if len(selected) >= count:
                    break
                if entry["text"] not in used:
                    used.add(entry["text"])
                    selected.append({**entry, "category": category})
        
        if len(selected) < count:
            self._fill_from_bank(count, used, selected)
        
        if len(selected) < count:
            logger.warning(
                f"Question bank exhausted: requested {count}, selected {len(selected)} "
                f"(category={category}, difficulty={difficulty})"
            )
        
        questions = [
            Question(
                text=entry["text"],
                order=i,
                category=entry["category"],
                expected_keywords=list(entry.get("expected_keywords", []))
            )
            for i, entry in enumerate(selected)
        ]
        logger.info(f"Generated {len(questions)} questions (category={category}, difficulty={difficulty})")
        return questions
    
    def _pool_for(self, category: str, difficulty: str) -> QuestionPool:
        """Difficulty pool for a category, falling back to the medium pool."""
        pools = self.question_bank.get(category, {})
        pool = pools.get(difficulty)
        if not pool:
            pool = pools.get(DEFAULT_DIFFICULTY, [])
        return pool
    
    def _shuffled_pool(self, category: str, difficulty: str) -> QuestionPool:
        pool = list(self._pool_for(category, difficulty))
        self.rng.shuffle(pool)
        return pool
    
    def _select_mixed(
        self,
        difficulty: str,
        count: int,
        used: Set[str],
        selected: List[Dict[str, Any]]
    ):
        """Round-robin across a shuffled category list; exhausted categories skip their slot."""
        categories = self.categories
        if not categories:
            return
        self.rng.shuffle(categories)
        pools = {cat: self._shuffled_pool(cat, difficulty) for cat in categories}
        
        for i in range(count):
            cat = categories[i % len(categories)]
            entry = next((e for e in pools[cat] if e["text"] not in used), None)
            if entry is None:
                continue
            used.add(entry["text"])
            selected.append({**entry, "category": cat})
    
    def _fill_from_bank(self, count: int, used: Set[str], selected: List[Dict[str, Any]]):
        """Top up the list with any unused question from any category or difficulty."""
        for pools in self.question_bank.values():
            for pool in pools.values():
                for entry in pool:
                    if len(selected) >= count:
                        return
                    if entry["text"] not in used:
                        used.add(entry["text"])
                        selected.append({**entry, "category": FILLER_CATEGORY})
