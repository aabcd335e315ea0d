"""
Text processing utilities for transcripts and LLM output.
"""
import json
import re
from typing import Iterable, List, Optional


def normalize_text(text: Optional[str]) -> str:
    """Lowercase and trim a transcript."""
    if not text:
        return ""
    return text.strip().lower()


def tokenize(text: str) -> List[str]:
    """Split normalized text into whitespace-delimited words."""
    return text.split()


def count_term_occurrences(text: str, terms: Iterable[str]) -> int:
    """
    Count whole-word (or whole-phrase) occurrences of terms in text.
    
    Args:
        text: Normalized (lowercase) text
        terms: Words or multi-word phrases to look for
        
    Returns:
        Total number of matches across all terms
    """
    total = 0
    for term in terms:
        pattern = r'(?<!\w)' + re.escape(term.lower()) + r'(?!\w)'
        total += len(re.findall(pattern, text))
    return total


def find_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Return the keywords that appear as case-insensitive substrings of text."""
    lowered = text.lower()
    return [kw for kw in keywords if kw.lower() in lowered]


def extract_json_object(text: str) -> Optional[dict]:
    """
    Extract the first balanced JSON object embedded in free text.
    
    Braces inside JSON strings are ignored while scanning. Returns None if no
    balanced object is found or the candidate does not decode to a dict.
    """
    if not text:
        return None
    
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    try:
                        parsed = json.loads(text[start:i + 1])
                    except json.JSONDecodeError:
                        break
                    return parsed if isinstance(parsed, dict) else None
        start = text.find("{", start + 1)
    return None


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, marking the cut with an ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def unique_items(items: Iterable[str], limit: int) -> List[str]:
    """Deduplicate non-empty strings in first-seen order and cap the result at limit."""
    seen = set()
    result = []
    for item in items:
        if not isinstance(item, str):
            continue
        item = item.strip()
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
        if len(result) >= limit:
            break
    return result
