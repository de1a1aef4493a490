# falgen/core/catalog.py
"""
Model catalog source.

fetch_catalog()  -> List[CatalogItem]   raises CatalogError
load_catalog()   -> (items, from_network)  never raises; falls back to a
                    small built-in list when the API is unreachable.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Tuple

import requests

from .errors import CatalogError
from .models import CatalogItem
from .utils import dig, fetch_json

logger = logging.getLogger(__name__)

CATALOG_URL = "https://fal.ai/api/models"
CATALOG_LIMIT = 1000

# Only text-to-* models make sense with a prompt-only form
SUPPORTED_CATEGORIES = ("text-to-image", "text-to-video")
# ...and some of those still need an input image
EXCLUDE_PATTERNS = (
    "/edit", "/lora", "/img2img", "/inpaint", "/outpaint", "/upscale",
    "/controlnet", "/ip-adapter", "/redux", "/canny", "/depth",
)

FALLBACK_CATALOG: Tuple[CatalogItem, ...] = (
    CatalogItem("fal-ai/flux-2", "Flux 2", "text-to-image", "Latest Flux"),
    CatalogItem("fal-ai/flux/dev", "FLUX.1 [dev]", "text-to-image", "High quality"),
    CatalogItem("fal-ai/flux/schnell", "FLUX.1 [schnell]", "text-to-image", "Fast"),
    CatalogItem("fal-ai/recraft-v3", "Recraft V3", "text-to-image", "Vector art"),
    CatalogItem("fal-ai/kling-video/v1.6/pro/text-to-video", "Kling 1.6", "text-to-video", "Video"),
    CatalogItem("fal-ai/veo2", "Veo 2", "text-to-video", "Google video"),
    CatalogItem("fal-ai/luma-dream-machine", "Luma", "text-to-video", "Video"),
)

def is_supported(entry: Dict[str, Any]) -> bool:
    if entry.get("deprecated") or entry.get("removed") or entry.get("unlisted"):
        return False
    if entry.get("kind") != "inference":
        return False
    if entry.get("category") not in SUPPORTED_CATEGORIES:
        return False
    mid = str(entry.get("id") or "").lower()
    if not mid:
        return False
    return not any(p in mid for p in EXCLUDE_PATTERNS)

def parse_catalog(entries: Iterable[Any]) -> List[CatalogItem]:
    items: List[CatalogItem] = []
    seen = set()
    for e in entries:
        if not isinstance(e, dict) or not is_supported(e):
            continue
        item = CatalogItem.from_api(e)
        if item.id in seen:
            continue
        seen.add(item.id)
        items.append(item)
    return items

def fetch_catalog(url: str = CATALOG_URL, limit: int = CATALOG_LIMIT) -> List[CatalogItem]:
    logger.debug("Fetching catalog %s (limit=%d)", url, limit)
    try:
        data = fetch_json(url, params={"limit": limit})
    except requests.RequestException as e:
        raise CatalogError(f"Catalog fetch failed: {e}") from e
    except ValueError as e:
        raise CatalogError(f"Catalog response is not JSON: {e}") from e

    entries = dig(data, "items")
    if entries is None and isinstance(data, list):
        entries = data
    if not isinstance(entries, list):
        raise CatalogError("Catalog response has no 'items' list")

    items = parse_catalog(entries)
    logger.debug("Catalog: %d of %d entries usable", len(items), len(entries))
    return items

def load_catalog(offline: bool = False) -> Tuple[List[CatalogItem], bool]:
    if offline:
        return list(FALLBACK_CATALOG), False
    try:
        return fetch_catalog(), True
    except CatalogError as e:
        logger.warning("%s, using defaults", e)
        return list(FALLBACK_CATALOG), False
