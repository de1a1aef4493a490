from __future__ import annotations
from typing import Any, Dict, Optional
from .http import SESSION

def dig(obj: Any, *keys: str) -> Any:
    cur = obj
    for k in keys:
        if not isinstance(cur, dict): return None
        cur = cur.get(k)
    return cur

def fetch_json(url: str, params: Optional[Dict[str, Any]] = None, timeout: int = 15) -> Any:
    r = SESSION.get(url, params=params, timeout=timeout)
    r.raise_for_status()
    return r.json()
