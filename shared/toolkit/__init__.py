"""Shared dispatch framework for agent-facing tools, resources and prompts."""

from .registry import (
    ListedResource,
    NoArguments,
    PromptMeta,
    Registry,
    RegistryBuilder,
    ResourceContent,
    ResourceMeta,
    ToolAnnotations,
    ToolMeta,
)
from .outcome import Envelope, Err, JsonItem, Ok, TextItem, render_outcome
from .errors import InputValidationError, NotRegisteredError, ToolError
from .uri import UriTemplate
from .catalog import generate_catalog_markdown

__all__ = [
    "ListedResource",
    "NoArguments",
    "PromptMeta",
    "Registry",
    "RegistryBuilder",
    "ResourceContent",
    "ResourceMeta",
    "ToolAnnotations",
    "ToolMeta",
    "Envelope",
    "Err",
    "JsonItem",
    "Ok",
    "TextItem",
    "render_outcome",
    "InputValidationError",
    "NotRegisteredError",
    "ToolError",
    "UriTemplate",
    "generate_catalog_markdown",
]
