import sys
from pathlib import Path
from typing import Optional
from logging import getLogger

import click
import importlib_resources

from .logging import configure_logging
from .config import Config, load_config, default_config_file, set_config
from .web.app import init_app
from .web.func import make_post_service

logger = getLogger(__name__)

config_file_option = click.option(
    "-f",
    "--config-file",
    default=None,
    help="Path to config file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def _load(config_file: Optional[Path]) -> Config:
    configure_logging()
    if config_file is None:
        config_file = default_config_file()
    config = load_config(config_file)
    set_config(config)
    return config


@click.command("flatblog-serve", help="Serve the site and the posts api")
@config_file_option
@click.option("--host", default=None, help="Interface to bind to")
@click.option("--port", default=None, type=int, help="Port to listen on")
def serve(config_file: Optional[Path], host: Optional[str], port: Optional[int]):
    config = _load(config_file)
    app = init_app(config)
    host = host or config.host
    port = port or config.port
    logger.info("serving %s at http://%s:%d/", config.site_root, host, port)
    app.run(host=host, port=port, threaded=True)


@click.command("flatblog-regenerate", help="Regenerate every post's html page")
@config_file_option
def regenerate(config_file: Optional[Path]) -> None:
    config = _load(config_file)
    _, failed = make_post_service(config).regenerate_all()
    if failed > 0:
        sys.exit(1)


@click.command("flatblog-init", help="Create an empty site (posts file, template)")
@config_file_option
def init_site(config_file: Optional[Path]) -> None:
    config = _load(config_file)
    post_service = make_post_service(config)
    post_service.store.ensure_exists()
    config.posts_path().mkdir(parents=True, exist_ok=True)
    config.uploads_path().mkdir(parents=True, exist_ok=True)
    template_path = config.template_path()
    if template_path.exists():
        logger.info("template already exists at %s", template_path)
    else:
        template = (
            importlib_resources.files("flatblog")
            .joinpath("default_template.html")
            .read_text(encoding="utf-8")
        )
        template_path.write_text(template, encoding="utf-8")
        logger.info("wrote default template to %s", template_path)


@click.command("flatblog-config")
@config_file_option
def config_cli(config_file: Optional[Path]):
    logger.info(_load(config_file))
