import click
import logging
import traceback
import asyncio
import yaml
from python_on_whales import DockerClient

from .config import Config
from .builder import Builder
from .constants import Environment
from .utils import setup_logger, parse_module_levels
from .io import create_app_fs
from .exceptions import (
    NodeBuilderError,
    ConfigurationError,
    ToolError,
    BuildError,
    NBIOError,
)
from . import constants
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    setup_logger(debug=debug, module_levels=parse_module_levels(log_levels), log_file=log_file)


def _abort(message: str):
    logging.error(message)
    ctx = click.get_current_context()
    if (ctx.obj or {}).get('debug'):
        traceback.print_exc()
    raise click.Abort()


def handle_errors(func):
    """Decorator to handle common exceptions"""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.Abort:
            raise
        except ConfigurationError as e:
            _abort(f"Configuration error: {e}")
        except ToolError as e:
            _abort(f"External tool failed: {e}")
        except BuildError as e:
            _abort(f"Build error: {e}")
        except NBIOError as e:
            _abort(f"File system error: {e}")
        except NodeBuilderError as e:
            _abort(f"An unexpected application error occurred: {e}")
        except FileNotFoundError as e:
            _abort(f"A required file was not found: {e}")
        except Exception as e:
            _abort(f"An unexpected error occurred: {e}")
    return wrapper


def _compose_file(config: Config):
    return config.dirs.build / constants.DOCKER_SUBDIR / constants.DOCKER_COMPOSE_FILENAME


@handle_errors
def do_build(manifest: str, image: bool, keep_temp: bool):
    """Execute build command"""
    cli_fs = create_app_fs()
    config = Config(manifest, cli_fs)
    builder = Builder(config, fs=cli_fs, build_image=image, keep_temp=keep_temp)
    asyncio.run(builder.run())


@handle_errors
def do_validate(manifest: str):
    """Execute validate command"""
    config = Config(manifest, create_app_fs())
    data = config.model.model_dump(mode="json", by_alias=True, exclude_none=True)
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False), nl=False)


@handle_errors
def do_clean(manifest: str):
    """Execute clean command"""
    cli_fs = create_app_fs()
    config = Config(manifest, cli_fs)
    dirs = config.dirs
    for path in (dirs.build, dirs.temp):
        if cli_fs.exists(path):
            cli_fs.rmtree(path)
            logging.info(f"Removed '{path}'.")
    logging.info(f"Project '{config.name}' cleaned.")


@handle_errors
def do_up(manifest: str, detach: bool, build_images: bool):
    """Execute up command - start the emitted Docker context"""
    cli_fs = create_app_fs()
    config = Config(manifest, cli_fs)
    if not config.has(Environment.DOCKER):
        logging.error("The `docker` target is not configured for this project.")
        raise click.Abort()

    compose_file = _compose_file(config)
    if not cli_fs.exists(compose_file):
        logging.error(f"docker-compose.yml not found at {compose_file}")
        logging.info("Please run 'nodeb build' first.")
        raise click.Abort()

    logging.info(f"Starting '{config.shortcut}'...")
    docker_client = DockerClient(compose_files=[compose_file.__path__()])
    try:
        docker_client.compose.up(detach=detach, build=build_images)
        if detach:
            logging.info(f"'{config.shortcut}' started in background.")
    except KeyboardInterrupt:
        logging.info("\nStopping containers...")
        docker_client.compose.down()
        logging.info("Containers stopped.")


@handle_errors
def do_down(manifest: str, remove_volumes: bool):
    """Execute down command - stop the emitted Docker context"""
    cli_fs = create_app_fs()
    config = Config(manifest, cli_fs)
    compose_file = _compose_file(config)
    if not cli_fs.exists(compose_file):
        logging.error(f"docker-compose.yml not found at {compose_file}")
        raise click.Abort()

    logging.info(f"Stopping '{config.shortcut}'...")
    DockerClient(compose_files=[compose_file.__path__()]).compose.down(volumes=remove_volumes)
    logging.info(f"'{config.shortcut}' stopped.")


manifest_option = click.option(
    '-m', '--manifest',
    default=constants.MANIFEST_FILENAME,
    show_default=True,
    type=click.Path(dir_okay=False),
    help='Path to the package.json carrying the `builder` section',
)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'bld=DEBUG,fs=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='nodebuilder')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """Node Builder - Package Node.js applications for deployment

    \b
    Examples:
      nodeb build                 Build from ./package.json
      nodeb build --image         Build and create the Docker image
      nodeb validate -m app/package.json
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@manifest_option
@click.option('--image', is_flag=True, help='Build a local Docker image from the emitted context')
@click.option('--keep-temp', is_flag=True, help='Keep the temp directory (bundle, webpack config)')
@click.option('--debug', is_flag=True, help='Enable debug logging for this command')
@click.option('-f', '--log-file', help='Path to log file')
@click.pass_context
def build(ctx, manifest, image, keep_temp, debug, log_file):
    """Bundle, compile and emit all deployment artifacts"""
    if debug and not ctx.obj.get('debug'):
        ctx.obj['debug'] = True
        setup_logging(debug=True, log_levels=None, log_file=log_file)
    do_build(manifest, image, keep_temp)


@cli.command()
@manifest_option
def validate(manifest):
    """Validate the manifest and print the normalized configuration"""
    do_validate(manifest)


@cli.command()
@manifest_option
def clean(manifest):
    """Remove the build directory"""
    do_clean(manifest)


@cli.command()
@manifest_option
@click.option('-d', '--detach', is_flag=True, help='Run containers in background')
@click.option('--build', 'build_images', is_flag=True, help='Build images before starting')
def up(manifest, detach, build_images):
    """Start the built Docker context with docker compose

    \b
    Examples:
      nodeb up -d               Start in background
    """
    do_up(manifest, detach, build_images)


@cli.command()
@manifest_option
@click.option('-v', '--volumes', is_flag=True, help='Also remove volumes')
def down(manifest, volumes):
    """Stop the containers started by `up`"""
    do_down(manifest, volumes)
