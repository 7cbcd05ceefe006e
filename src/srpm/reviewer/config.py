"""Reviewer configuration read from `srpmreview.toml`."""

from pathlib import Path
import tomllib
from typing import Any, Self

from attrs import define, field

from .exceptions import ConfigError

CONFIG_FILE_NAME = "srpmreview.toml"
USER_TEMPLATE_DIR = Path("~/.config/srpmreview")
SYSTEM_TEMPLATE_DIR = Path("/usr/share/srpmreview")


def _as_str_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a string or a list of strings.")
    return list(value)


@define(slots=True)
class ReviewConfig:
    template: str = "default"
    template_dirs: list[str] = field(factory=lambda: ["."])
    output: str = "./review.txt"
    copy: bool = False
    mock: list[str] = field(factory=list)
    koji: list[str] = field(factory=list)

    @property
    def template_search_path(self) -> list[Path]:
        return [
            *(Path(d) for d in self.template_dirs),
            USER_TEMPLATE_DIR.expanduser(),
            SYSTEM_TEMPLATE_DIR,
        ]

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Self:
        config = cls()
        if "template" in data:
            config.template = str(data["template"])
        if "template_dirs" in data:
            config.template_dirs = _as_str_list(data["template_dirs"], "template_dirs")
        if "output" in data:
            config.output = str(data["output"])
        if "copy" in data:
            if not isinstance(data["copy"], bool):
                raise ConfigError("'copy' must be true or false.")
            config.copy = data["copy"]
        if "mock" in data:
            config.mock = _as_str_list(data["mock"], "mock")
        if "koji" in data:
            config.koji = _as_str_list(data["koji"], "koji")
        return config

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """
        Loads `[tool.srpmreview]` from *path*, or from `srpmreview.toml` in the
        working directory when no path is given. A missing default file yields
        the built-in defaults.
        """
        config_path = Path(path) if path else Path.cwd() / CONFIG_FILE_NAME
        if not config_path.exists():
            if path:
                raise ConfigError(f"Config file not found: {config_path}")
            return cls()
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            raise ConfigError(f"'tool' in {config_path} must be a table.")
        section = tool.get("srpmreview", {})
        if not isinstance(section, dict):
            raise ConfigError(f"'tool.srpmreview' in {config_path} must be a table.")
        return cls.from_mapping(section)
