"""build-dependency CLI - Resolve provider manifests into build chains.

Entry point for the ``build-dependency`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve    - Resolve targets against a YAML manifest of packages.

Usage::

    build-dependency resolve packages.yaml app
    build-dependency resolve packages.yaml salad --select apple
    build-dependency resolve packages.yaml app lib --partial app
    build-dependency --verbose resolve packages.yaml --format json
"""

from __future__ import annotations

import logging

import click

from build_dependency import __version__
from build_dependency.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log every resolution step.")
def cli(verbose: bool) -> None:
    """build-dependency: Deterministic dependency resolution for builds.

    Compute the topological build order of packages, the provisions they
    produce, and diagnostics for unresolved or ambiguous dependencies.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# Register all subcommands
cli.add_command(resolve_command)
