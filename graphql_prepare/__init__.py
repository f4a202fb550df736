"""GraphQL Prepare

Bundles schema imports into a single schema and generates client bindings
for the projects of a GraphQL config file.
"""

__version__ = "1.0.0"

from .bindings import BindingGenerationError, generate_code
from .config import PrepareArguments
from .errors import (
    ConfigNotFoundError,
    ConfigurationMissingError,
    OutputDirectoryError,
    PrepareError,
    ResourceMissingError,
    SchemaNotFoundError,
    SchemaReadError,
    WriteValidationError,
)
from .graphql_config import GraphQLConfig, GraphQLProjectConfig
from .importer import SchemaImportError, import_schema
from .prepare import Prepare

__all__ = [
    "Prepare",
    "PrepareArguments",
    "GraphQLConfig",
    "GraphQLProjectConfig",
    "import_schema",
    "generate_code",
    "PrepareError",
    "ConfigurationMissingError",
    "ConfigNotFoundError",
    "ResourceMissingError",
    "SchemaNotFoundError",
    "SchemaReadError",
    "OutputDirectoryError",
    "WriteValidationError",
    "SchemaImportError",
    "BindingGenerationError",
]
