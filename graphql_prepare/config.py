"""
Run arguments and extension keys for the prepare command.

The extension keys describe where previous runs stored their outputs inside
the `extensions` section of a project. Each setting has an ordered list of
candidate keys: the current key first, deprecated keys after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any


@dataclass(frozen=True)
class ExtensionKey:
    """A dotted key inside a project's `extensions` section."""

    path: str

    # Key that replaces this one (only set on deprecated keys)
    replaced_by: str | None = None

    @property
    def deprecated(self) -> bool:
        return self.replaced_by is not None

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))

    def get(self, extensions: dict[str, Any] | None) -> Any:
        """Return the value stored under this key, or None when it is not set."""
        value: Any = extensions
        for part in self.parts:
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value

    def is_set(self, extensions: dict[str, Any] | None) -> bool:
        return self.get(extensions) is not None


BUNDLE_KEY = "prepare-bundle"
BINDING_KEY = "prepare-binding"

# Deprecated top-level extension keys and the keys replacing them; a
# deprecated section is removed on save once its replacement is set
DEPRECATED_SECTIONS = {"bundle": BUNDLE_KEY, "binding": BINDING_KEY}

BUNDLE_OUTPUT_KEYS = (
    ExtensionKey(BUNDLE_KEY),
    ExtensionKey("bundle", replaced_by=BUNDLE_KEY),
    ExtensionKey("bundle.output", replaced_by=BUNDLE_KEY),
)

BINDING_OUTPUT_KEYS = (
    ExtensionKey(f"{BINDING_KEY}.output"),
    ExtensionKey("binding.output", replaced_by=f"{BINDING_KEY}.output"),
)

GENERATOR_KEYS = (
    ExtensionKey(f"{BINDING_KEY}.generator"),
    ExtensionKey("binding.generator", replaced_by=f"{BINDING_KEY}.generator"),
)

# Keys whose presence marks a step as configured for a project
BUNDLE_SECTION_KEYS = (ExtensionKey(BUNDLE_KEY), ExtensionKey("bundle", replaced_by=BUNDLE_KEY))
BINDING_SECTION_KEYS = (ExtensionKey(BINDING_KEY), ExtensionKey("binding", replaced_by=BINDING_KEY))


@dataclass(frozen=True)
class PrepareArguments:
    """Options of a single prepare run."""

    # Projects to process (empty = every project in the config file)
    projects: tuple[str, ...] = field(default_factory=tuple)

    # Output folder; outputs are written to <output>/<project>.<extension>
    output: str | None = None

    # Binding generator overriding the one stored in the config file
    generator: str | None = None

    # Steps to run
    bundle: bool = False
    bindings: bool = False

    # Persist the outputs into the config file
    save: bool = False

    # Report skipped steps and enable debug logging
    verbose: bool = False

    # Create the directory of an output path when it does not exist
    create_dirs: bool = True

    def with_default_steps(self) -> PrepareArguments:
        """Run both steps when neither was requested."""
        if not self.bundle and not self.bindings:
            return replace(self, bundle=True, bindings=True)
        return self

    @staticmethod
    def from_dict(d: dict) -> PrepareArguments:
        """Create arguments from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(PrepareArguments)}
        values = {k: v for k, v in d.items() if k in known}
        projects = values.get("projects")
        if projects is None:
            values.pop("projects", None)
        elif isinstance(projects, str):
            values["projects"] = (projects,)
        else:
            values["projects"] = tuple(projects)
        return PrepareArguments(**values)

    def to_dict(self) -> dict:
        """Convert arguments to a dictionary."""
        return {
            "projects": list(self.projects),
            "output": self.output,
            "generator": self.generator,
            "bundle": self.bundle,
            "bindings": self.bindings,
            "save": self.save,
            "verbose": self.verbose,
            "create_dirs": self.create_dirs,
        }
