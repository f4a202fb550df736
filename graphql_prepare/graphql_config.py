"""
GraphQL config file access.

Reads and writes `.graphqlconfig` files (JSON or YAML). A config file either
describes one root project (`schemaPath`, `extensions`) or several named
projects under a `projects` section.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigNotFoundError, ConfigurationMissingError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (
    ".graphqlconfig",
    ".graphqlconfig.json",
    ".graphqlconfig.yml",
    ".graphqlconfig.yaml",
)

YAML_SUFFIXES = (".yml", ".yaml")


def find_config_path(start_dir: str | Path | None = None) -> Path:
    """Find the closest config file, looking in `start_dir` and its parents.

    Raises:
        ConfigNotFoundError: If no directory up to the root holds a config file
    """
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    raise ConfigNotFoundError(f"Couldn't find a GraphQL config file in '{start}' or any parent directory.")


def _is_yaml(path: Path) -> bool:
    return path.suffix in YAML_SUFFIXES


class GraphQLProjectConfig:
    """Configuration of a single project inside a config file."""

    def __init__(self, name: str | None, config: dict[str, Any], config_dir: Path):
        self.name = name
        self.config = config
        self.config_dir = config_dir

    @property
    def schema_path(self) -> str | None:
        """The project schema, resolved against the config file directory."""
        schema_path = self.config.get("schemaPath")
        if not schema_path:
            return None
        return str(self.config_dir / schema_path)

    @property
    def extensions(self) -> dict[str, Any]:
        extensions = self.config.get("extensions")
        if not isinstance(extensions, dict):
            extensions = {}
            self.config["extensions"] = extensions
        return extensions

    def __repr__(self) -> str:
        return f"GraphQLProjectConfig(name={self.name!r}, schemaPath={self.config.get('schemaPath')!r})"


class GraphQLConfig:
    """A loaded config file with its projects."""

    def __init__(self, config_path: Path, document: dict[str, Any]):
        self.config_path = config_path
        self.document = document

    @classmethod
    def load(cls, path: str | Path | None = None) -> GraphQLConfig:
        """Load a config file, looking it up from the working directory when no path is given."""
        config_path = Path(path).resolve() if path is not None else find_config_path()
        try:
            with open(config_path, encoding="utf-8") as f:
                if _is_yaml(config_path):
                    document = yaml.safe_load(f)
                else:
                    document = json.load(f)
        except FileNotFoundError as e:
            raise ConfigNotFoundError(f"Config file '{config_path}' not found.") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigNotFoundError(f"Config file '{config_path}' is not valid: {e}") from e

        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise ConfigNotFoundError(f"Config file '{config_path}' must contain an object.")

        logger.debug("Loaded config file %s", config_path)
        return cls(config_path, document)

    @property
    def config_dir(self) -> Path:
        return self.config_path.parent

    def get_projects(self) -> dict[str, GraphQLProjectConfig] | None:
        """Return all named projects in file order, or None when the file has no projects section."""
        projects = self.document.get("projects")
        if not isinstance(projects, dict):
            return None
        return {name: GraphQLProjectConfig(name, config, self.config_dir) for name, config in projects.items()}

    def get_project_config(self, name: str | None = None) -> GraphQLProjectConfig:
        """Return a named project, or the root project when `name` is None."""
        if name is None:
            return GraphQLProjectConfig(None, self.document, self.config_dir)

        projects = self.document.get("projects")
        if not isinstance(projects, dict) or name not in projects:
            raise ConfigurationMissingError(f"'{name}' is not a valid project name.")
        return GraphQLProjectConfig(name, projects[name], self.config_dir)

    def save_config(self, project_config: dict[str, Any], name: str | None = None) -> None:
        """Store a project config and write the whole file back."""
        if name is None:
            self.document = project_config
        else:
            self.document.setdefault("projects", {})[name] = project_config

        with open(self.config_path, "w", encoding="utf-8") as f:
            if _is_yaml(self.config_path):
                yaml.safe_dump(self.document, f, sort_keys=False, default_flow_style=False)
            else:
                json.dump(self.document, f, indent=2)
                f.write("\n")
        logger.debug("Saved config for project %s to %s", name, self.config_path)
