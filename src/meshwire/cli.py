from __future__ import annotations

import asyncio

import click
from meshwire import VERSION
from meshwire.config import Config
from meshwire.exceptions import MeshwireException
from meshwire.log import configure_logging
from meshwire.plugins.loader import import_fn
from meshwire.plugins.packages import candidate_modules, get_package

CATEGORIES = ["handler", "cache", "pubsub", "merger"]


@click.group()
@click.version_option(version=VERSION)
@click.option("--log-level", default=Config.LOG_LEVEL, help="Logging level e.g. DEBUG")
def main(log_level, **kwargs):
    configure_logging(level=log_level)


@main.command()
@click.argument("name")
@click.argument("category", type=click.Choice(CATEGORIES))
@click.option("--scope", default=Config.PACKAGE_SCOPE, help="Package scope searched first")
def candidates(name, category, scope):
    """List the modules searched for NAME, in order"""
    for module_name in candidate_modules(name, category, scope=scope):
        click.echo(module_name)


@main.command()
@click.argument("name")
@click.argument("category", type=click.Choice(CATEGORIES))
@click.option("--scope", default=Config.PACKAGE_SCOPE, help="Package scope searched first")
def find(name, category, scope):
    """Resolve NAME to an importable extension"""
    named_fallbacks = ("parser",) if category == "handler" else ()
    try:
        found = asyncio.run(get_package(name, category, import_fn, named_fallbacks=named_fallbacks, scope=scope))
    except MeshwireException as exc:
        raise click.ClickException(str(exc)) from exc

    module_name = getattr(found, "__module__", None)
    qualname = getattr(found, "__qualname__", None)
    label = f"{module_name}.{qualname}" if module_name and qualname else getattr(found, "__name__", repr(found))
    click.echo(f"{category} {name}: {label}")
