from logging import getLogger
from os import environ
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

import toml
from platformdirs import user_data_dir

logger = getLogger(__name__)

DEFAULT_PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1497366216548-37526070297c?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80"


@dataclass
class Config:
    """A typecheckable config object.

    Relative paths are relative to site_root, use the *_path() methods rather
    than joining them yourself.

    """

    site_root: Path
    data_file: str
    posts_dir: str
    uploads_dir: str
    uploads_url: str
    template_name: str
    placeholder_image: str
    escape_html: bool
    regenerate_on_startup: bool
    max_content_length: int
    host: str
    port: int
    environment: str
    sentry_dsn: Optional[str]

    def data_path(self) -> Path:
        return self.site_root / self.data_file

    def posts_path(self) -> Path:
        return self.site_root / self.posts_dir

    def uploads_path(self) -> Path:
        return self.site_root / self.uploads_dir

    def template_path(self) -> Path:
        return self.posts_path() / self.template_name


__config__: Optional[Config] = None


def load_config(config_file: Path) -> Config:
    """Loads the configuration at the given path.

    Unknown keys are ignored.

    """
    logger.info("loading config from %s", config_file)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as config_f:
            as_dict = toml.load(config_f)
    else:
        logger.warning("config file ('%s') not found, using defaults", config_file)
        as_dict = {}
    return Config(
        site_root=Path(as_dict.get("site_root", user_data_dir("flatblog"))),
        data_file=as_dict.get("data_file", "blog/data/posts.json"),
        posts_dir=as_dict.get("posts_dir", "blog/posts"),
        uploads_dir=as_dict.get("uploads_dir", "assets/uploads"),
        uploads_url=as_dict.get("uploads_url", "/assets/uploads"),
        template_name=as_dict.get("template_name", "template.html"),
        placeholder_image=as_dict.get("placeholder_image", DEFAULT_PLACEHOLDER_IMAGE),
        escape_html=as_dict.get("escape_html", False),
        regenerate_on_startup=as_dict.get("regenerate_on_startup", True),
        max_content_length=as_dict.get("max_content_length", 50 * 1024 * 1024),
        host=as_dict.get("host", "127.0.0.1"),
        port=as_dict.get("port", 3001),
        environment=as_dict.get("environment", "local"),
        sentry_dsn=as_dict.get("sentry_dsn"),
    )


def default_config_file() -> Path:
    """Returns the location of the default config file"""
    if "FLATBLOG_CONFIG" in environ:
        return Path(environ["FLATBLOG_CONFIG"])
    return Path.home() / ".flatblog.toml"


def get_config() -> Config:
    """Returns the config.

    The the config does not change while the program is running, but in order
    to make it easy to test, don't call this function from the top-level (that
    makes it hard to mock).

    """
    global __config__
    if __config__ is None:
        __config__ = load_config(default_config_file())

    return __config__


def set_config(config: Config) -> None:
    """Replace the process-wide config (used by the cli's --config-file)."""
    global __config__
    __config__ = config
