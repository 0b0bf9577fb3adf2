"""Command line helpers for EventForge."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import DispatcherConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .dispatcher import EventDispatcher
from .domain.listeners import describe_listener

console = Console()


def run_listeners() -> None:
    parser = argparse.ArgumentParser(description="EventForge listener overview")
    parser.add_argument("module", help="Python module with register(dispatcher) function")
    parser.add_argument("--event", help="Show the resolved call order for one event name")
    args = parser.parse_args()

    dispatcher = EventDispatcher(DispatcherConfig.from_env())
    _load_module(args.module, dispatcher)

    if args.event:
        listeners = dispatcher.get_listeners(args.event)
        if not listeners:
            console.print(f"No listeners for '{args.event}'.", style="yellow")
            return
        table = Table(title=f"Call order for '{args.event}'", show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Listener")
        table.add_column("Priority", justify="right")
        for position, listener in enumerate(listeners, start=1):
            priority = dispatcher.get_listener_priority(args.event, listener)
            table.add_row(
                str(position),
                describe_listener(listener),
                "-" if priority is None else str(priority),
            )
        console.print(table)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Event")
    table.add_column("Priority", justify="right")
    table.add_column("Listener")
    table.add_column("Kind")
    rows = 0
    for entry in dispatcher.iter_registrations():
        table.add_row(
            entry.event_name,
            str(entry.priority),
            describe_listener(entry.listener),
            "wildcard" if entry.wildcard else "exact",
        )
        rows += 1
    if not rows:
        console.print("No listeners registered.", style="yellow")
        return
    console.print(table)


def run_checklist() -> None:
    parser = argparse.ArgumentParser(description="EventForge sanity checks")
    parser.add_argument("module", help="Python module with register(dispatcher) function")
    args = parser.parse_args()

    dispatcher = EventDispatcher(DispatcherConfig.from_env())
    _load_module(args.module, dispatcher)

    issues = checklist_run(dispatcher)
    if not issues:
        console.print("[bold green]No issues found[/bold green]")
        return
    for issue in issues:
        style = "red" if issue.severity == "error" else "yellow"
        console.print(f"[{issue.severity.upper()}] {issue.message}", style=style, markup=False)
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def _load_module(path: str, dispatcher: EventDispatcher) -> None:
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(path)
    if hasattr(module, "register"):
        module.register(dispatcher)
    else:
        raise RuntimeError(f"Module {path} has no register(dispatcher) function.")
