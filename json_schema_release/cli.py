"""
Command line entry point.

Runs the release steps from a shell. `prepare` verifies first, in the same
process, since preparation is only allowed after a successful verification.
"""

import json
import logging

import click

from .config import Language, Languages, PluginConfig, ReleaseContext
from .errors import SemanticReleaseError
from .plugin import ReleasePlugin


def _load_config(config_path, schema_locations, outpath=None, output_name=None, languages=(), compile_ts=False) -> PluginConfig:
    if config_path is not None:
        with open(config_path) as f:
            config = PluginConfig.from_dict(json.load(f))
    else:
        config = PluginConfig()

    # Command line options override the config file
    if schema_locations:
        config.schema_location = list(schema_locations)
    if outpath is not None:
        config.outpath = outpath
    if output_name is not None:
        config.output_name = output_name
    if languages:
        config.languages = Languages.from_dict({language: True for language in languages})
    if compile_ts:
        config.compile_ts = True
    return config


def _fail(error: SemanticReleaseError):
    message = f"{error.code}: {error.message}"
    if error.details:
        message += f"\n{error.details}"
    raise click.ClickException(message)


config_option = click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True, dir_okay=False), help="JSON plugin configuration")
schema_option = click.option("--schema-location", "-s", "schema_locations", multiple=True, help="Schema file (repeatable)")


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def json_schema_release(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@json_schema_release.command()
@config_option
@schema_option
def verify(config_path, schema_locations):
    """Check that every configured schema exists."""
    config = _load_config(config_path, schema_locations)
    try:
        ReleasePlugin().verify_conditions(config)
    except SemanticReleaseError as e:
        _fail(e)
    click.echo("verified")


@json_schema_release.command()
@config_option
@schema_option
@click.option("--next-version", "-n", required=True, help="Version of the release being prepared")
@click.option("--outpath", "-o", default=None, type=click.Path(file_okay=False), help="Output root directory")
@click.option("--output-name", default=None, help="Base name of the TypeScript declaration file")
@click.option("--language", "-l", "languages", multiple=True, type=click.Choice([lang.value for lang in Language]), help="Language to generate (repeatable, default: all)")
@click.option("--compile-ts", is_flag=True, default=False, help="Compile the TypeScript sources with tsc")
def prepare(config_path, schema_locations, next_version, outpath, output_name, languages, compile_ts):
    """Verify, then generate the artifacts of the selected languages."""
    config = _load_config(config_path, schema_locations, outpath, output_name, languages, compile_ts)
    context = ReleaseContext.from_dict({"nextRelease": {"version": next_version}})
    plugin = ReleasePlugin()
    try:
        plugin.verify_conditions(config, context)
        plugin.prepare(config, context)
    except SemanticReleaseError as e:
        _fail(e)
    click.echo(f"prepared {next_version}")
