#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared TUI components (Menu, SearchPicker, helpers) for falgen.
"""
from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

try:
    import msvcrt
except ImportError:
    msvcrt = None

import platform

from .core import rank, to_options, CatalogItem, ScoredMatch, SearchConfig, SelectOption

def get_system_label() -> str:
    """Return a formatted system status string."""
    os_name = {"Darwin": "macOS"}.get(platform.system(), platform.system())
    menu_mode = "Interactive" if msvcrt else "Basic"
    return f"[dim]Running on {os_name} {platform.release()} ({menu_mode} Mode)[/]"

def clear_screen(console: Console) -> None:
    console.clear()

def header_art() -> str:
    return "  FAL.AI MEDIA GENERATOR"

def get_full_header() -> str:
    """Return title + system info for consistent UI."""
    return f"[bold white on blue]{header_art()}  [/]\n{get_system_label()}"

def section(console: Console, title: str, subtitle: str = "") -> None:
    clear_screen(console)
    msg = f"{get_full_header()}\n\n[bold]{title}[/]"
    if subtitle:
        msg += f"\n[dim]{subtitle}[/]"
    console.print(Panel.fit(msg, border_style="blue"))

def _read_key() -> Tuple[str, str]:
    """Read one key via msvcrt -> (kind, char). kind: up/down/enter/esc/back/char."""
    key = msvcrt.getch()
    if key in (b'\000', b'\xe0'):  # Arrows
        key = msvcrt.getch()
        if key == b'H': return "up", ""
        if key == b'P': return "down", ""
        return "", ""
    if key == b'\r': return "enter", ""
    if key == b'\x1b': return "esc", ""
    if key == b'\x08': return "back", ""
    ch = key.decode("utf-8", errors="ignore")
    return ("char", ch) if ch.isprintable() else ("", "")

class Menu:
    """Simple Interactive Menu for Windows (falls back to prompt on others)"""
    def __init__(self, console_: Console, items: List[Tuple[str, Any]], title: str = "", subtitle: str = ""):
        self.console = console_
        self.items = items  # list of (label, return_value)
        self.title = title
        self.subtitle = subtitle
        self.idx = 0

    def show(self) -> Any:
        if not msvcrt:
            self.console.print(f"[bold]{self.title}[/]")
            for i, (label, _) in enumerate(self.items, 1):
                self.console.print(f"[{i}] {label}")
            ans = Prompt.ask("Select", default="1")
            if ans.isdigit() and 1 <= int(ans) <= len(self.items):
                return self.items[int(ans)-1][1]
            return None

        while True:
            section(self.console, self.title, self.subtitle)
            lines = []
            for i, (label, _) in enumerate(self.items):
                cursor = "➤ " if i == self.idx else "  "
                if i == self.idx:
                    lines.append(f"[reverse bold cyan]{cursor}{label}[/]")
                else:
                    lines.append(f"{cursor}{label}")
            self.console.print("\n".join(lines))
            self.console.print("\n[dim]Use ↑/↓ and Enter to select. Esc/0 to Cancel.[/]")

            kind, ch = _read_key()
            if kind == "up":
                self.idx = max(0, self.idx - 1)
            elif kind == "down":
                self.idx = min(len(self.items) - 1, self.idx + 1)
            elif kind == "enter":
                return self.items[self.idx][1]
            elif kind == "esc" or ch in ("0", "q"):
                return None

# ────────────────────────── Search results ──────────────────────────
def results_table(options: Sequence[SelectOption], idx: Optional[int] = None,
                  start: int = 0, limit: int = 15, title: str = "") -> Table:
    table = Table(title=title or None, header_style="bold magenta", box=box.SIMPLE_HEAVY)
    table.add_column("#", no_wrap=True, justify="right")
    table.add_column("Model", max_width=32, overflow="ellipsis", no_wrap=True)
    table.add_column("ID", max_width=40, overflow="ellipsis", no_wrap=True, style="dim")
    table.add_column("Description", max_width=50, overflow="ellipsis", no_wrap=True)
    for i, opt in enumerate(options[start:start + limit], start):
        style = "reverse bold cyan" if i == idx else ("dim italic" if not opt.selectable else "")
        num = str(i + 1) if opt.selectable else "-"
        table.add_row(num, escape(opt.name), escape(opt.value), escape(opt.description), style=style)
    return table

def status_line(options: Sequence[SelectOption], total: int, idx: Optional[int] = None) -> str:
    shown = sum(1 for o in options if o.selectable)
    sel = options[idx] if idx is not None and 0 <= idx < len(options) else None
    if sel is not None and sel.selectable:
        return f"{escape(sel.name)} | {shown}/{total}"
    return f"{shown}/{total} models"

class SearchPicker:
    """Type-to-filter model picker; every keystroke re-ranks the whole catalog."""
    def __init__(self, console_: Console, catalog: Sequence[CatalogItem],
                 config: Optional[SearchConfig] = None, query: str = "", page_size: int = 15):
        self.console = console_
        self.catalog = list(catalog)
        self.config = config or SearchConfig()
        self.query = query
        self.page_size = page_size
        self.idx = 0

    def results(self) -> Tuple[List[ScoredMatch], List[SelectOption]]:
        matches = rank(self.catalog, self.query, self.config)
        return matches, to_options(matches)

    def _render(self, options: List[SelectOption]) -> None:
        section(self.console, "Models", "Type to fuzzy search (flux, video, kling...)")
        self.console.print(Panel(f"{escape(self.query)}[blink]▏[/]", title=" Search ", border_style="cyan"))
        self.console.print(f"[dim]{status_line(options, len(self.catalog), self.idx)}[/]")
        start = max(0, self.idx - self.page_size + 1)
        self.console.print(results_table(options, self.idx, start, self.page_size))

    def show(self) -> Optional[CatalogItem]:
        if not msvcrt:
            return self._show_basic()

        while True:
            matches, options = self.results()
            self.idx = min(self.idx, len(options) - 1)
            self._render(options)
            self.console.print("[dim]↑/↓: browse · Enter: select · Backspace: edit · Esc: cancel[/]")

            kind, ch = _read_key()
            if kind == "up":
                self.idx = max(0, self.idx - 1)
            elif kind == "down":
                self.idx = min(len(options) - 1, self.idx + 1)
            elif kind == "back":
                self.query, self.idx = self.query[:-1], 0
            elif kind == "char":
                self.query, self.idx = self.query + ch, 0
            elif kind == "enter":
                if options[self.idx].selectable:
                    return matches[self.idx].item
            elif kind == "esc":
                return None

    def _show_basic(self) -> Optional[CatalogItem]:
        while True:
            matches, options = self.results()
            label = f"'{escape(self.query)}'" if self.query.strip() else "popular first"
            self.console.print(results_table(options, limit=self.page_size, title=f"Models ({label})"))
            self.console.print(f"[dim]{status_line(options, len(self.catalog))}[/]")
            ans = Prompt.ask(
                "Select # or type a new search ('=' searches literally, '/' clears, blank cancels)",
                default="",
            ).strip()
            if not ans:
                return None
            if ans == "/":
                self.query = ""
            elif ans.startswith("="):
                self.query = ans[1:]
            elif ans.isdigit():
                i = int(ans) - 1
                if 0 <= i < len(matches):
                    return matches[i].item
                self.console.print("[yellow]No such entry.[/]")
            else:
                self.query = ans
