from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

@dataclass(frozen=True)
class CatalogItem:
    id: str
    title: str = ""
    category: str = ""
    description: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "CatalogItem":
        mid = str(raw.get("id") or "")
        tags = raw.get("tags") or ()
        return cls(
            id=mid,
            title=str(raw.get("title") or mid.split("/")[-1]),
            category=str(raw.get("category") or "other"),
            description=str(raw.get("shortDescription") or ""),
            tags=tuple(str(t) for t in tags if t),
        )

@dataclass(frozen=True)
class ScoredMatch:
    item: CatalogItem
    score: float

@dataclass(frozen=True)
class SelectOption:
    name: str
    value: str = ""
    description: str = ""

    @property
    def selectable(self) -> bool:
        return bool(self.value)

@dataclass(frozen=True)
class AspectRatio:
    label: str
    value: str
    description: str = ""
    image_size: str = "square_hd"  # preset name for image_size-style models
