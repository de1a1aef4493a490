# falgen/core/search.py
"""
Ranked fuzzy search over the model catalog.

  - fuzzy_score(q, t)        -> float   (0 = no match)
  - score_item(item, q)      -> float   (weighted sum over searchable fields)
  - rank(catalog, q, cfg)    -> List[ScoredMatch]  (filtered, stable, capped)
  - to_options(matches)      -> List[SelectOption] (renderer rows / placeholder)

Everything here is pure: the catalog and query come in as arguments and a
fresh list goes out, so the UI can call it on every keystroke.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import CatalogItem, ScoredMatch, SelectOption

EXACT_SCORE = 1000.0
PREFIX_SCORE = 500.0
BOUNDARY_SCORE = 300.0
SUBSTRING_SCORE = 200.0
# subsequence hits never reach the substring tier
SUBSEQUENCE_CEILING = SUBSTRING_SCORE - 1

BOUNDARY_CHARS = " -/"
MAX_RESULTS = 100

FIELD_WEIGHTS: Dict[str, float] = {
    "title": 3.0,
    "id": 2.0,
    "category": 1.5,
    "description": 0.5,
}
TAG_WEIGHT = 1.2

DEFAULT_POPULAR_TERMS: Tuple[str, ...] = ("flux", "veo", "kling", "wan", "stable")
DEFAULT_POPULAR_BOOST = 100.0

NO_MATCHES = SelectOption(name="No matches", value="", description="Try different terms")

# ────────────────────────── Config ──────────────────────────
@dataclass(frozen=True)
class SearchConfig:
    popular_terms: Tuple[str, ...] = DEFAULT_POPULAR_TERMS
    popular_boost: float = DEFAULT_POPULAR_BOOST

    @classmethod
    def from_cfg(cls, cfg: Optional[Dict[str, Any]]) -> "SearchConfig":
        cfg = cfg or {}
        terms = cfg.get("popular_terms", cfg.get("popularTerms"))
        if isinstance(terms, str):
            terms = terms.split(",")
        elif not isinstance(terms, (list, tuple)):
            terms = DEFAULT_POPULAR_TERMS
        terms = tuple(t.strip().lower() for t in terms if isinstance(t, str) and t.strip())
        try:
            boost = float(cfg.get("popular_boost", DEFAULT_POPULAR_BOOST))
        except (TypeError, ValueError):
            boost = DEFAULT_POPULAR_BOOST
        return cls(popular_terms=terms, popular_boost=boost)

    def is_popular(self, title: Any) -> bool:
        if not isinstance(title, str):
            return False
        t = title.lower()
        return any(term in t for term in self.popular_terms)

# ────────────────────────── Scoring ──────────────────────────
def _subsequence_score(q: str, t: str) -> float:
    # accumulator: (consumed, run, last_index, score)
    consumed, run, last, score = 0, 0, -2, 0.0
    for i, ch in enumerate(t):
        if consumed == len(q):
            break
        if ch != q[consumed]:
            continue
        if i == last + 1:
            run += 1
            score += 10 + 5 * run
        else:
            run = 0
            score += 5
        if i == 0 or t[i - 1] in BOUNDARY_CHARS:
            score += 15
        consumed, last = consumed + 1, i
    if consumed < len(q):
        return 0.0
    return min(score, SUBSEQUENCE_CEILING)

def fuzzy_score(query: str, target: Optional[str]) -> float:
    """Score how well `query` matches `target` (case-insensitive). 0 means no match."""
    q = (query or "").lower()
    t = (target or "").lower()
    if not q or not t:
        return 0.0
    if t == q:
        return EXACT_SCORE
    ratio = len(q) / len(t)
    if t.startswith(q):
        return PREFIX_SCORE + ratio * 100
    if f" {q}" in t or f"-{q}" in t:
        return BOUNDARY_SCORE + ratio * 50
    if q in t:
        return SUBSTRING_SCORE + ratio * 50
    return _subsequence_score(q, t)

def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)

def _text(item: Any, name: str) -> str:
    value = _field(item, name)
    return value if isinstance(value, str) else ""

def score_item(item: Any, query: str) -> float:
    """Weighted relevance of one catalog item; only the best tag counts."""
    q = (query or "").strip().lower()
    if not q:
        return 0.0
    total = 0.0
    for name, weight in FIELD_WEIGHTS.items():
        value = _field(item, name)
        if isinstance(value, str):
            total += fuzzy_score(q, value) * weight
    tags = _field(item, "tags") or ()
    if isinstance(tags, str):
        tags = (tags,)
    best_tag = max((fuzzy_score(q, tag) for tag in tags if isinstance(tag, str)), default=0.0)
    return total + best_tag * TAG_WEIGHT

# ────────────────────────── Ranking pipeline ──────────────────────────
def rank(
    catalog: Iterable[CatalogItem],
    query: str,
    config: Optional[SearchConfig] = None,
) -> List[ScoredMatch]:
    cfg = config or SearchConfig()
    q = (query or "").strip()

    if not q:
        results = [
            ScoredMatch(item, cfg.popular_boost if cfg.is_popular(_field(item, "title")) else 0.0)
            for item in catalog
        ]
    else:
        results = []
        for item in catalog:
            s = score_item(item, q)
            if s > 0:
                results.append(ScoredMatch(item, s))

    # sorted() is stable: equal scores keep catalog order
    results = sorted(results, key=lambda m: m.score, reverse=True)
    return results[:MAX_RESULTS]

def to_options(matches: Sequence[ScoredMatch], width: int = 50) -> List[SelectOption]:
    if not matches:
        return [NO_MATCHES]
    out: List[SelectOption] = []
    for m in matches:
        it = m.item
        desc = f"[{_text(it, 'category')}] {_text(it, 'description')}"
        out.append(SelectOption(
            name=_text(it, "title") or _text(it, "id"),
            value=_text(it, "id"),
            description=desc[:width],
        ))
    return out
