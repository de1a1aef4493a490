#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
UI layer for falgen

- Catalog load with a live status spinner (falls back to built-ins offline)
- Type-to-search model picker backed by the ranking engine
- Aspect ratio menu + prompt
- Final generation request shown for review (submission is out of scope)
- Settings (popular terms for the default view, verbose logging)
"""

from __future__ import annotations
import logging
import os
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich.status import Status
from rich.syntax import Syntax

from .core import (
    ASPECT_RATIOS,
    CatalogItem,
    GenerationRequest,
    RequestError,
    SearchConfig,
    build_request,
    config_path,
    find_ratio,
    load_catalog,
    load_cfg,
    save_cfg,
    set_verbose,
)
from .tui import Menu, SearchPicker, clear_screen, section

logger = logging.getLogger(__name__)

console = Console()

# ────────────────────────── Catalog ──────────────────────────
def load_catalog_with_status(offline: bool = False) -> List[CatalogItem]:
    with Status("[bold]Fetching models…[/]", console=console, spinner="dots"):
        items, from_network = load_catalog(offline=offline)
    if from_network:
        console.print(f"[green]Loaded {len(items)} models[/]")
    else:
        console.print(f"[yellow]Using {len(items)} built-in models[/] [dim](catalog unavailable)[/]")
    logger.info("Catalog ready: %d models (network=%s)", len(items), from_network)
    return items

# ────────────────────────── Pickers ──────────────────────────
def pick_model(catalog: List[CatalogItem], cfg: Dict[str, Any], query: str = "") -> Optional[CatalogItem]:
    picker = SearchPicker(console, catalog, SearchConfig.from_cfg(cfg), query=query)
    item = picker.show()
    if item:
        logger.info("Selected: %s (%s)", item.title, item.id)
    return item

def pick_ratio(model: CatalogItem, default: str = "1:1") -> Optional[str]:
    items = [(f"{r.label} [dim]{r.description}[/]", r.value) for r in ASPECT_RATIOS]
    # put the last-used ratio first
    items.sort(key=lambda it: it[1] != find_ratio(default).value)
    return Menu(console, items, title="Aspect Ratio", subtitle=f"Model: {escape(model.title)}").show()

def show_request(req: GenerationRequest, model: CatalogItem) -> None:
    console.print(Panel(
        Syntax(req.to_json(), "json", theme="ansi_dark", background_color="default"),
        title=f"🎬 Generation request · {escape(model.title)}",
        border_style="green",
        expand=False,
    ))

# ────────────────────────── Generate flow ──────────────────────────
def run_generate_flow(cfg: Dict[str, Any], catalog: List[CatalogItem]) -> Optional[GenerationRequest]:
    model = pick_model(catalog, cfg)
    if not model:
        section(console, "Canceled")
        return None

    ratio = pick_ratio(model, cfg.get("last_ratio", "1:1"))
    if not ratio:
        section(console, "Canceled")
        return None

    section(console, "Prompt", f"Model: {escape(model.title)} · Ratio: {ratio}")
    prompt = Prompt.ask("Prompt", default="").strip()
    try:
        req = build_request(model.id, prompt, ratio)
    except RequestError as e:
        console.print(f"[red]Error:[/] {e}")
        logger.warning("Request not built: %s", e)
        return None

    cfg["last_model"], cfg["last_ratio"] = model.id, ratio
    save_cfg(cfg)

    section(console, "Request Ready", "Submit this with your fal.ai client of choice.")
    show_request(req, model)
    console.input("[dim]Press Enter to continue...[/]")
    return req

def run_search_only(cfg: Dict[str, Any], catalog: List[CatalogItem]) -> None:
    model = pick_model(catalog, cfg)
    if not model:
        return
    section(console, escape(model.title), escape(model.id))
    console.print(Panel(
        f"[bold cyan]Category:[/] {model.category}\n"
        f"[bold cyan]Description:[/] {escape(model.description) or '-'}\n"
        f"[bold cyan]Tags:[/] {escape(', '.join(model.tags)) or '-'}",
        title="📦 Model Details",
        border_style="green",
        expand=False,
    ))
    console.input("[dim]Press Enter to continue...[/]")

# ────────────────────────── Settings ──────────────────────────
def settings_menu(cfg: Dict[str, Any]) -> None:
    section(console, "Settings / Info", f"Config: {config_path()}")
    console.print(f"Popular terms: [cyan]{', '.join(cfg.get('popular_terms', [])) or '(none)'}[/]")
    console.print(f"Verbose logs: {'ON' if cfg.get('verbose', False) else 'OFF'}")
    console.print(f"FAL_KEY: {'[green]set[/]' if os.environ.get('FAL_KEY') else '[yellow]missing[/]'}")
    if Confirm.ask("Edit popular terms?", default=False):
        raw = Prompt.ask("Comma-separated terms", default=",".join(cfg.get("popular_terms", [])))
        cfg["popular_terms"] = list(SearchConfig.from_cfg({"popular_terms": raw}).popular_terms)
        save_cfg(cfg)
    if Confirm.ask("Toggle verbose?", default=False):
        cfg["verbose"] = not cfg.get("verbose", False)
        save_cfg(cfg)
        set_verbose(cfg["verbose"])

# ────────────────────────── Main menu ──────────────────────────
def main_menu(offline: bool = False) -> None:
    cfg = load_cfg()
    section(console, "Starting…")
    catalog = load_catalog_with_status(offline=offline)

    while True:
        items = [
            ("Browse & Generate", "GENERATE"),
            ("Search Models [dim](details only)[/]", "SEARCH"),
            ("Reload Catalog", "RELOAD"),
            ("Settings / Info", "SETTINGS"),
            ("Exit", "EXIT"),
        ]
        menu = Menu(console, items,
                    title="FAL.AI Media Generator",
                    subtitle=f"{len(catalog)} models · Last model: {cfg.get('last_model') or '(none)'}")
        ans = menu.show()

        if ans == "EXIT" or ans is None:
            clear_screen(console)
            return
        elif ans == "GENERATE":
            run_generate_flow(cfg, catalog)
        elif ans == "SEARCH":
            run_search_only(cfg, catalog)
        elif ans == "RELOAD":
            catalog = load_catalog_with_status(offline=offline)
        elif ans == "SETTINGS":
            settings_menu(cfg)
