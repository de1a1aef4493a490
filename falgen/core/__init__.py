# falgen/core/__init__.py
from .models import CatalogItem, ScoredMatch, SelectOption, AspectRatio
from .search import (
    fuzzy_score, score_item, rank, to_options,
    SearchConfig, NO_MATCHES, MAX_RESULTS,
)
from .catalog import fetch_catalog, load_catalog, FALLBACK_CATALOG
from .request import ASPECT_RATIOS, build_request, find_ratio, GenerationRequest
from .errors import FalgenError, CatalogError, RequestError
from .config import load_cfg, save_cfg, config_path

__all__ = [
    "CatalogItem", "ScoredMatch", "SelectOption", "AspectRatio",
    "fuzzy_score", "score_item", "rank", "to_options",
    "SearchConfig", "NO_MATCHES", "MAX_RESULTS",
    "fetch_catalog", "load_catalog", "FALLBACK_CATALOG",
    "ASPECT_RATIOS", "build_request", "find_ratio", "GenerationRequest",
    "FalgenError", "CatalogError", "RequestError",
    "load_cfg", "save_cfg", "config_path",
    "setup_logging", "set_verbose",
]

# ---- simple logging toggle for the package ----
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
CONSOLE_HANDLER = "falgen-console"

def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> Optional[Path]:
    """Configure root logging; returns the per-run log file when log_dir is given.

    The TUI owns the screen, so the console handler only shows warnings unless
    verbose; everything at DEBUG/INFO still lands in the log file.
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER)
    console_handler.setLevel(level if verbose else logging.WARNING)
    handlers = [console_handler]

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().isoformat().replace(":", "-").replace(".", "-")
        log_file = log_dir / f"{stamp}.log"
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("[%(asctime)s] " + LOG_FORMAT))
        handlers.append(fh)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    # quiet down noisy deps
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    if log_file:
        logging.getLogger(__name__).info("=== falgen log started %s ===", datetime.now().isoformat())
    return log_file

def set_verbose(verbose: bool) -> None:
    """Flip an already configured setup between verbose and quiet, keeping the log file."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    for h in root.handlers:
        if h.get_name() == CONSOLE_HANDLER:
            h.setLevel(logging.DEBUG if verbose else logging.WARNING)
