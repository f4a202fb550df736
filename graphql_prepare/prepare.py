"""
Prepare command: bundle schemas and generate bindings for each project.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .bindings import generate_code
from .config import BINDING_SECTION_KEYS, BUNDLE_SECTION_KEYS, DEPRECATED_SECTIONS, ExtensionKey, PrepareArguments
from .errors import ConfigurationMissingError
from .graphql_config import GraphQLConfig, GraphQLProjectConfig
from .importer import import_schema
from .status import StatusReporter, highlight
from .steps import BindingFragment, BundleFragment, Flatten, Generate, is_configured, run_bindings, run_bundle

logger = logging.getLogger(__name__)


class Prepare:
    """Runs the bundle and binding steps over the projects of a config file.

    Projects are processed one after another. Any error aborts the whole
    run; outputs already written stay on disk.
    """

    def __init__(
        self,
        config: GraphQLConfig,
        args: PrepareArguments,
        reporter: StatusReporter | None = None,
        flatten: Flatten | None = None,
        generate: Generate | None = None,
    ):
        self.config = config
        self.args = args
        self.reporter = reporter or StatusReporter(verbose=args.verbose)
        self.flatten = flatten or import_schema
        self.generate = generate or generate_code
        # (project, step, output) for every file written in this run
        self.summary: list[tuple[str, str, str]] = []

        self.project: GraphQLProjectConfig | None = None
        self.bundle_fragment: BundleFragment | None = None
        # Whether any step changed the current project's extensions
        self.changed = False

    def handle(self) -> None:
        for project in self.get_projects().values():
            logger.debug("Processing project %s", project.name)
            self.set_current_project(project)
            if self.args.bundle:
                self.bundle()
            if self.args.bindings:
                self.bindings()
            self.save()

    def get_projects(self) -> dict[str, GraphQLProjectConfig]:
        """Projects to process: the requested ones, or all projects in the config file."""
        if self.args.projects:
            projects = {name: self.config.get_project_config(name) for name in self.args.projects}
        else:
            projects = self.config.get_projects()

        if not projects:
            raise ConfigurationMissingError("No projects defined in config file")
        return projects

    def set_current_project(self, project: GraphQLProjectConfig) -> None:
        self.project = project
        self.bundle_fragment = None
        self.changed = False

    def _display_name(self) -> str:
        return highlight(str(self.project.name))

    def _should_run(self, section_keys: tuple[ExtensionKey, ...]) -> bool:
        return bool(self.args.projects) or is_configured(self.project, section_keys)

    def _merge(self, fragment: BundleFragment | BindingFragment) -> None:
        written = fragment.to_extensions()
        self.project.extensions.update(written)
        self.changed = True
        for key in fragment.deprecated_keys:
            # Saving migrates a deprecated section only when this step wrote its replacement
            if not self.args.save or DEPRECATED_SECTIONS.get(key.parts[0]) not in written:
                self.reporter.warn(
                    f"Deprecated extension key '{key.path}' found in config file. Use '--save' to update to '{key.replaced_by}'."
                )

    def bundle(self) -> None:
        if not self._should_run(BUNDLE_SECTION_KEYS):
            if self.args.verbose:
                self.reporter.info(f"Bundling not configured for project {self._display_name()}. Skipping")
            return

        self.reporter.start(f"Processing schema imports for project {self._display_name()}...")
        self.bundle_fragment = run_bundle(self.project, self.args, self.flatten)
        self._merge(self.bundle_fragment)
        self.summary.append((self.project.name, "bundle", self.bundle_fragment.output))
        self.reporter.succeed(f"Bundled schema for project {self._display_name()} written to {highlight(self.bundle_fragment.output)}")

    def bindings(self) -> None:
        if not self._should_run(BINDING_SECTION_KEYS):
            if self.args.verbose:
                self.reporter.info(f"Binding not configured for project {self._display_name()}. Skipping")
            return

        self.reporter.start(f"Generating bindings for project {self._display_name()}...")
        bundle_output = self.bundle_fragment.output if self.bundle_fragment else None
        fragment = run_bindings(self.project, self.args, bundle_output, self.generate)
        self._merge(fragment)
        self.summary.append((self.project.name, "bindings", fragment.output))
        self.reporter.succeed(f"Bindings for project {self._display_name()} written to {highlight(fragment.output)}")

    def save(self) -> None:
        if not self.args.save:
            return
        if not self.changed:
            logger.debug("Nothing to save for project %s", self.project.name)
            return

        config_file = Path(self.config.config_path).name
        self.reporter.start(f"Saving configuration for project {self._display_name()} to {highlight(config_file)}...")
        extensions = self.project.extensions
        for key, replaced_by in DEPRECATED_SECTIONS.items():
            if replaced_by in extensions:
                extensions.pop(key, None)
        self.config.save_config(self.project.config, self.project.name)
        self.reporter.succeed(f"Configuration for project {self._display_name()} saved to {highlight(config_file)}")
