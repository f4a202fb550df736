import logging

import click

from .bindings import BindingGenerationError
from .cli_utils import reconstruct_command_line
from .config import PrepareArguments
from .errors import PrepareError
from .graphql_config import GraphQLConfig
from .importer import SchemaImportError
from .prepare import Prepare
from .status import StatusReporter

logger = logging.getLogger(__name__)


@click.command(name="prepare", help="Bundle schemas and generate bindings")
@click.option("--project", "-p", "projects", multiple=True, help="Project to process (repeatable, default: all projects)")
@click.option("--output", "-o", default=None, type=str, help="Output folder")
@click.option("--save", "-s", is_flag=True, default=False, help="Save settings to config file")
@click.option("--bundle", is_flag=True, default=False, help="Process schema imports")
@click.option("--bindings", is_flag=True, default=False, help="Generate bindings")
@click.option("--generator", "-g", default=None, type=str, help="Generator used to generate bindings")
@click.option("--verbose", is_flag=True, default=False, help="Show verbose output messages")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="GraphQL config file (default: closest .graphqlconfig)",
)
@click.option("--create-dirs/--no-create-dirs", default=True, help="Create missing output directories")
def prepare(projects, output, save, bundle, bindings, generator, verbose, config_path, create_dirs):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    logger.debug("Running %s", reconstruct_command_line(prepare))

    args = PrepareArguments(
        projects=tuple(projects),
        output=output,
        generator=generator,
        bundle=bundle,
        bindings=bindings,
        save=save,
        verbose=verbose,
        create_dirs=create_dirs,
    ).with_default_steps()
    reporter = StatusReporter(verbose=verbose)

    try:
        config = GraphQLConfig.load(config_path)
        Prepare(config, args, reporter).handle()
    except (PrepareError, SchemaImportError, BindingGenerationError, OSError) as e:
        reporter.fail(str(e))
        raise click.exceptions.Exit(1) from e


def register(cli: click.Group) -> None:
    """Add the prepare command to a host command group."""
    cli.add_command(prepare)
