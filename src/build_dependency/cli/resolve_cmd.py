"""``build-dependency resolve <manifest> [targets]`` - Resolve a build chain.

Loads packages from a YAML manifest, resolves the requested targets and
prints the topological build order, the provisions to produce, and any
unresolved dependencies, conflicts or cycles.

Exit Codes:
    0 - Every dependency resolved.
    1 - Unresolved dependencies, conflicts or cycles remain.
    2 - Invalid manifest, unknown package, or nothing to resolve.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from build_dependency.core import Chain
from build_dependency.exceptions import ManifestError
from build_dependency.manifest import load_manifest, parse_name


@click.command("resolve")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("targets", nargs=-1)
@click.option(
    "--select", "-s", "selection",
    multiple=True,
    help="Prefer this package when several supply a name (repeatable).",
)
@click.option(
    "--partial", "-p",
    default=None,
    help="Show only the build closure of this package.",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table).",
)
def resolve_command(
    manifest: str,
    targets: tuple[str, ...],
    selection: tuple[str, ...],
    partial: str | None,
    output_format: str,
) -> None:
    """Resolve TARGETS against the packages in MANIFEST.

    TARGETS default to the manifest's ``targets`` list. A leading ``:``
    names a symbolic alias, as in ``:platform``. Explicit ``--select``
    names are added to the manifest's ``selection``.

    Exit code 0 when fully resolved, 1 when anything is left unresolved,
    2 on invalid input.
    """
    try:
        loaded = load_manifest(Path(manifest))
        names = [parse_name(target, "target") for target in targets] or loaded.targets
    except ManifestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if not names:
        click.echo("Error: no targets given and the manifest declares none.", err=True)
        sys.exit(2)

    chain = Chain(names, loaded.packages, [*loaded.selection, *selection])
    result = chain

    if partial is not None:
        package = loaded.package(partial)
        if package is None:
            click.echo(f"Error: unknown package {partial!r}.", err=True)
            sys.exit(2)
        result = chain.partial(package)

    from build_dependency.cli.output import chain_to_dict, print_chain
    if output_format == "json":
        click.echo(json.dumps(chain_to_dict(result), indent=2))
    else:
        print_chain(result)

    sys.exit(1 if result.unresolved or result.cycles else 0)
