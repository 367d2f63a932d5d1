"""Rich output formatting helpers for the build-dependency CLI.

Renders a resolved chain (or partial chain) as terminal tables, or as a
plain dictionary for JSON output. Only the chain's public accessors are
used: ``dependencies``, ``selection``, ``ordered``, ``provisions``,
``unresolved``, ``conflicts`` and ``cycles``.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from build_dependency.core import Key

console = Console()


def label(name: Any) -> str:
    """Display form of a dependency name; symbolic keys get a ``:`` prefix."""
    if isinstance(name, Key):
        return f":{name.name}"
    return str(name)


def provider_label(provider: Any) -> str:
    return str(getattr(provider, "name", None) or provider)


def chain_to_dict(chain: Any) -> dict[str, Any]:
    """Summarize a chain as JSON-serializable data."""
    return {
        "dependencies": [label(dependency.name) for dependency in chain.dependencies],
        "selection": sorted(chain.selection),
        "ordered": [
            {
                "provider": provider_label(resolution.provider),
                "dependency": label(resolution.name),
            }
            for resolution in chain.ordered
        ],
        "provisions": [
            {
                "provider": provider_label(provision.provider),
                "name": label(provision.name),
            }
            for provision in chain.provisions
        ],
        "unresolved": [
            {"dependency": label(dependency.name), "parent": _parent_label(parent)}
            for dependency, parent in chain.unresolved
        ],
        "conflicts": {
            label(dependency.name): [provider_label(provider) for provider in providers]
            for dependency, providers in chain.conflicts.items()
        },
        "cycles": [
            {"dependency": label(dependency.name), "parent": _parent_label(parent)}
            for dependency, parent in chain.cycles
        ],
    }


def _parent_label(parent: Any) -> str:
    # Top-level requests have the synthetic root as parent.
    if getattr(parent, "name", None) == "<top>":
        return "<top>"
    return provider_label(parent)


def print_chain(chain: Any) -> None:
    """Print the build order, provisions and any diagnostics of *chain*."""
    complete = not chain.unresolved and not chain.cycles
    requested = ", ".join(label(dependency.name) for dependency in chain.dependencies)

    if complete:
        status = f"[bold green]Resolved[/bold green] {requested}"
    else:
        status = f"[bold red]Incomplete[/bold red] {requested}"
    console.print(Panel(status, title="Dependency Resolution"))

    if chain.ordered:
        table = Table(title="Build Order", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Provider", style="bold")
        table.add_column("Dependency")
        for index, resolution in enumerate(chain.ordered, 1):
            table.add_row(
                str(index), provider_label(resolution.provider), label(resolution.name)
            )
        console.print(table)
    else:
        console.print("[dim]Nothing to build.[/dim]")

    if chain.provisions:
        table = Table(title="Provisions", show_header=True, header_style="bold")
        table.add_column("Provision", style="bold")
        table.add_column("Provider")
        for provision in chain.provisions:
            table.add_row(label(provision.name), provider_label(provision.provider))
        console.print(table)

    for dependency, parent in chain.unresolved:
        console.print(
            f"  [red]- unresolved {label(dependency.name)} "
            f"(required by {_parent_label(parent)})[/red]"
        )

    for dependency, providers in chain.conflicts.items():
        names = ", ".join(provider_label(provider) for provider in providers)
        console.print(
            f"  [yellow]- conflict for {label(dependency.name)}: {names}[/yellow]"
        )

    for dependency, parent in chain.cycles:
        console.print(
            f"  [red]- cycle via {label(dependency.name)} "
            f"(required by {_parent_label(parent)})[/red]"
        )
