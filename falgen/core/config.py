# falgen/core/config.py
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .search import DEFAULT_POPULAR_BOOST, DEFAULT_POPULAR_TERMS

logger = logging.getLogger(__name__)

# ---- schema & defaults -------------------------------------------------------
SCHEMA_VERSION = 1
DEFAULT_CFG: Dict[str, Any] = {
    "schema": SCHEMA_VERSION,
    "popular_terms": list(DEFAULT_POPULAR_TERMS),  # default-view boost (empty query)
    "popular_boost": DEFAULT_POPULAR_BOOST,
    "verbose": False,      # extra logging in UI
    "last_model": "",      # model id picked last time
    "last_ratio": "1:1",
}

# ---- locations ---------------------------------------------------------------
# You can override location with env vars:
#   FALGEN_CONFIG=<full path to config.json>
#   FALGEN_DIR=<directory to place config.json>
def _windows_roaming_dir() -> Path:
    return Path(os.environ.get("APPDATA", Path.home() / "AppData/Roaming"))

def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

def config_dir() -> Path:
    env_dir = os.environ.get("FALGEN_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    if os.name == "nt":
        return (_windows_roaming_dir() / "falgen").resolve()
    return (_xdg_config_home() / "falgen").resolve()

def config_path() -> Path:
    env_path = os.environ.get("FALGEN_CONFIG")
    if env_path:
        p = Path(env_path).expanduser().resolve()
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    d = config_dir()
    d.mkdir(parents=True, exist_ok=True)
    return d / "config.json"

# ---- load / save -------------------------------------------------------------
def _merge_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_CFG.items()}
    out.update(cfg or {})
    if "schema" not in out:
        out["schema"] = SCHEMA_VERSION
    return out

def load_cfg() -> Dict[str, Any]:
    p = config_path()
    if not p.exists():
        return _merge_defaults({})
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        # If the file is corrupt, keep a .bad copy and start fresh
        logger.warning("Config %s unreadable (%s); starting fresh", p, e)
        try:
            p.rename(p.with_suffix(".bad.json"))
        except OSError:
            pass
        return _merge_defaults({})
    if not isinstance(raw, dict):
        return _merge_defaults({})
    return _merge_defaults(raw)

def save_cfg(cfg: Dict[str, Any]) -> None:
    p = config_path()
    tmp = p.with_suffix(".tmp")
    data = _merge_defaults(cfg)
    # Atomic-ish write
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    try:
        if p.exists():
            p.replace(p.with_suffix(".bak.json"))
    except OSError:
        pass
    tmp.replace(p)
    logger.debug("Saved config to %s", p)
