"""httpconv: HTTP protocol constants with extensible literal registries.

Methods, status codes, header names and MIME types, each with validity,
membership, group and normalization queries, plus header value
extraction. All public types are exported from this module for flat
imports:

    from httpconv import methods, mime_types, MIMEAttribute

    methods.normalize("patch")                          # "PATCH"
    mime_types.is_valid("gz", MIMEAttribute.EXTENSION)  # True

The module-level ``methods``, ``statuses``, ``headers`` and ``mime_types``
are process-wide defaults; construct ``Methods()`` etc. for an isolated
registry.
"""

import logging

__version__ = "0.1.0"

# Config: see httpconv._config for details
from httpconv._config import (
    ConfigParseError,
    ExtensionsConfig,
    apply_extensions_config,
    load_extensions_config,
    parse_extensions_config,
)

# Errors
from httpconv._errors import (
    DuplicateKeyError,
    DuplicateSecondaryError,
    HTTPConvenienceError,
    InvalidEntryError,
    RegistryFrozenError,
)

# Header value extractors
from httpconv._extractors import (
    BUILTIN_EXTRACTORS,
    TOKEN_EXTRACTORS,
    TokenScheme,
    array,
    b64,
    date,
    token,
)

# Registry machinery: see httpconv._registry for details
from httpconv._factory import (
    MAX_ROW_ARITY,
    Shape,
    Table,
    TableBuilder,
    build_table,
    group_index,
    secondary_index,
    table_from_entries,
)

# Domains
from httpconv._headers import HEADER_SHAPE, Header, Headers
from httpconv._methods import METHOD_GROUPS, METHOD_SHAPE, Method, MethodGroup, Methods
from httpconv._mime import (
    EXTENSION_PREFIX,
    MIME_SHAPE,
    MIMEAttribute,
    MIMEGroup,
    MIMEType,
    MIMETypes,
)
from httpconv._query import QueryEngine
from httpconv._registry import CustomSource, LiteralRegistry
from httpconv._statuses import (
    GROUPED_STATUS_CODES,
    HTTP_STATUSES,
    STATUS_RANGES,
    STATUS_SHAPE,
    HTTPStatus,
    StatusGroup,
    Statuses,
)
from httpconv._types import INAPPLICABLE, Attribute, Entry, Extractor, GroupSpec, Key, Row

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Process-wide default registries
methods = Methods()
statuses = Statuses()
headers = Headers()
mime_types = MIMETypes()

__all__ = [
    # Core types
    "INAPPLICABLE",
    "Attribute",
    "Entry",
    "Extractor",
    "GroupSpec",
    "Key",
    "Row",
    # Errors
    "HTTPConvenienceError",
    "InvalidEntryError",
    "DuplicateKeyError",
    "DuplicateSecondaryError",
    "RegistryFrozenError",
    # Registry machinery
    "MAX_ROW_ARITY",
    "Shape",
    "Table",
    "TableBuilder",
    "build_table",
    "table_from_entries",
    "group_index",
    "secondary_index",
    "CustomSource",
    "LiteralRegistry",
    "QueryEngine",
    # Methods
    "Method",
    "MethodGroup",
    "METHOD_GROUPS",
    "METHOD_SHAPE",
    "Methods",
    "methods",
    # Statuses
    "StatusGroup",
    "HTTPStatus",
    "GROUPED_STATUS_CODES",
    "HTTP_STATUSES",
    "STATUS_RANGES",
    "STATUS_SHAPE",
    "Statuses",
    "statuses",
    # Headers
    "Header",
    "HEADER_SHAPE",
    "Headers",
    "headers",
    # Header value extractors
    "TokenScheme",
    "TOKEN_EXTRACTORS",
    "BUILTIN_EXTRACTORS",
    "array",
    "date",
    "b64",
    "token",
    # MIME types
    "MIMEAttribute",
    "MIMEGroup",
    "MIMEType",
    "EXTENSION_PREFIX",
    "MIME_SHAPE",
    "MIMETypes",
    "mime_types",
    # Config
    "ExtensionsConfig",
    "ConfigParseError",
    "parse_extensions_config",
    "load_extensions_config",
    "apply_extensions_config",
]
