"""Registry of tools, resources and prompts exposed to the calling agent."""

import inspect
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InputValidationError, NotRegisteredError, ToolError
from .outcome import Envelope, Err, Ok, Outcome, TextItem, describe_error, render_outcome
from .uri import UriTemplate

logger = logging.getLogger(__name__)


class NoArguments(BaseModel):
    """Input model for tools that take no arguments."""

    model_config = ConfigDict(extra="forbid")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class ToolAnnotations:
    """Side-effect class of a tool, advertised to the caller."""

    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False
    open_world: bool = False


@dataclass
class ToolMeta:
    """Metadata and handler for an imperatively invoked tool."""

    name: str
    title: str
    description: str
    handler: Callable[[BaseModel], Awaitable[Ok]]
    input_model: type[BaseModel] = NoArguments
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)
    action: Optional[str] = None
    recovery_hint: Optional[str] = None

    @property
    def error_action(self) -> str:
        return self.action or f"running {self.name}"

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    async def invoke(self, arguments: Optional[Mapping[str, Any]]) -> Outcome:
        """Validate the arguments, run the handler and capture any failure."""
        try:
            params = self.input_model.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            error = InputValidationError.from_pydantic(exc)
            logger.warning(f"Rejected arguments for {self.name}: {error.problems}")
            return Err(error)

        try:
            return await self.handler(params)
        except InputValidationError as exc:
            logger.warning(f"Rejected arguments for {self.name}: {exc.problems}")
            return Err(exc)
        except Exception as exc:
            if isinstance(exc, ToolError):
                logger.error(f"Error {self.error_action}: {exc}")
            else:
                logger.exception(f"Unexpected failure in tool {self.name}")
            return Err(exc)


@dataclass(frozen=True)
class ListedResource:
    """A concrete address produced by a resource template's list handler."""

    uri: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ResourceContent:
    uri: str
    text: str
    mime_type: str


@dataclass
class ResourceMeta:
    """Metadata and handler for a read-only, URI-addressed resource."""

    name: str
    uri: str
    title: str
    description: str
    handler: Callable[..., Awaitable[Any]]
    mime_type: str = "application/json"
    list_handler: Optional[Callable[[], Any]] = None
    recovery_hint: Optional[str] = None
    template: UriTemplate = field(init=False)

    def __post_init__(self):
        self.template = UriTemplate(self.uri)

    @property
    def is_template(self) -> bool:
        return self.template.is_template

    async def read(self, uri: str, variables: dict[str, str]) -> list[ResourceContent]:
        try:
            data = await self.handler(**variables)
        except Exception as exc:
            if isinstance(exc, ToolError):
                logger.error(f"Error reading {uri}: {exc}")
            else:
                logger.exception(f"Unexpected failure reading {uri}")
            text = f"Error reading {uri}: {describe_error(exc, self.recovery_hint)}"
            return [ResourceContent(uri=uri, text=text, mime_type="text/plain")]

        if isinstance(data, str):
            return [ResourceContent(uri=uri, text=data, mime_type="text/plain")]
        return [
            ResourceContent(
                uri=uri,
                text=json.dumps(data, indent=2, default=str),
                mime_type=self.mime_type,
            )
        ]


@dataclass
class PromptMeta:
    """Metadata and renderer for a prompt template."""

    name: str
    title: str
    description: str
    argument_model: type[BaseModel]
    render: Callable[[BaseModel], str]

    def arguments(self) -> list[dict[str, Any]]:
        """Describe the prompt arguments as name/description/required dicts."""
        args = []
        for arg_name, info in self.argument_model.model_fields.items():
            args.append(
                {
                    "name": arg_name,
                    "description": info.description,
                    "required": info.is_required(),
                }
            )
        return args

    def get(self, arguments: Optional[Mapping[str, Any]]) -> str:
        try:
            params = self.argument_model.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            raise InputValidationError.from_pydantic(exc) from None
        return self.render(params)


class Registry:
    """
    Immutable lookup tables built by ``RegistryBuilder.build()``.

    Every identifier is unique within its address space; lookups of unknown
    identifiers raise ``NotRegisteredError``.
    """

    def __init__(
        self,
        tools: dict[str, ToolMeta],
        resources: dict[str, ResourceMeta],
        prompts: dict[str, PromptMeta],
    ):
        self._tools = MappingProxyType(dict(tools))
        self._resources = MappingProxyType(dict(resources))
        self._prompts = MappingProxyType(dict(prompts))

    @property
    def tools(self) -> Mapping[str, ToolMeta]:
        return self._tools

    @property
    def resources(self) -> Mapping[str, ResourceMeta]:
        return self._resources

    @property
    def prompts(self) -> Mapping[str, PromptMeta]:
        return self._prompts

    def tool(self, name: str) -> ToolMeta:
        try:
            return self._tools[name]
        except KeyError:
            raise NotRegisteredError("tool", name) from None

    def prompt(self, name: str) -> PromptMeta:
        try:
            return self._prompts[name]
        except KeyError:
            raise NotRegisteredError("prompt", name) from None

    async def call_tool(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> Envelope:
        """Run a tool by name. Never raises: every failure becomes an error envelope."""
        try:
            meta = self.tool(name)
        except NotRegisteredError as exc:
            logger.warning(str(exc))
            return Envelope(content=[TextItem(f"Error running {name}: {exc}")], is_error=True)
        outcome = await meta.invoke(arguments)
        return render_outcome(
            outcome, action=meta.error_action, recovery_hint=meta.recovery_hint
        )

    def static_resources(self) -> list[ResourceMeta]:
        return [r for r in self._resources.values() if not r.is_template]

    def resource_templates(self) -> list[ResourceMeta]:
        return [r for r in self._resources.values() if r.is_template]

    async def list_resources(self) -> list[ListedResource]:
        """Static resources plus every address enumerated by template list handlers."""
        listed = [
            ListedResource(uri=r.uri, name=r.title, description=r.description)
            for r in self.static_resources()
        ]
        for meta in self.resource_templates():
            if meta.list_handler is None:
                continue
            listed.extend(await _maybe_await(meta.list_handler()))
        return listed

    def resolve_resource(self, uri: str) -> tuple[ResourceMeta, dict[str, str]]:
        for meta in self.static_resources():
            if meta.uri == uri:
                return meta, {}
        for meta in self.resource_templates():
            variables = meta.template.match(uri)
            if variables is not None:
                return meta, variables
        raise NotRegisteredError("resource", uri)

    async def read_resource(self, uri: str) -> list[ResourceContent]:
        meta, variables = self.resolve_resource(uri)
        return await meta.read(uri, variables)

    def get_prompt(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        return self.prompt(name).get(arguments)


class RegistryBuilder:
    """
    Collects registrations once at startup and builds an immutable Registry.

    Usage:
        builder = RegistryBuilder()

        @builder.tool(
            "fetch-program",
            title="Get program",
            description="Get an entire program.",
            input_model=ProgramIdInput,
            read_only=True,
        )
        async def fetch_program(params: ProgramIdInput) -> Ok:
            ...

        registry = builder.build()
    """

    def __init__(self):
        self._tools: dict[str, ToolMeta] = {}
        self._resources: dict[str, ResourceMeta] = {}
        self._prompts: dict[str, PromptMeta] = {}

    def add_tool(self, meta: ToolMeta) -> None:
        if meta.name in self._tools:
            raise ValueError(f"Tool '{meta.name}' is already registered")
        self._tools[meta.name] = meta

    def add_resource(self, meta: ResourceMeta) -> None:
        if meta.name in self._resources:
            raise ValueError(f"Resource '{meta.name}' is already registered")
        if any(r.uri == meta.uri for r in self._resources.values()):
            raise ValueError(f"Resource URI '{meta.uri}' is already registered")
        self._resources[meta.name] = meta

    def add_prompt(self, meta: PromptMeta) -> None:
        if meta.name in self._prompts:
            raise ValueError(f"Prompt '{meta.name}' is already registered")
        self._prompts[meta.name] = meta

    def tool(
        self,
        name: str,
        *,
        title: str,
        description: str,
        input_model: type[BaseModel] = NoArguments,
        read_only: bool = False,
        destructive: bool = False,
        idempotent: bool = False,
        open_world: bool = False,
        action: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        """Decorator registering an async handler as a tool."""

        def decorator(func: Callable) -> Callable:
            self.add_tool(
                ToolMeta(
                    name=name,
                    title=title,
                    description=description,
                    handler=func,
                    input_model=input_model,
                    annotations=ToolAnnotations(
                        read_only=read_only,
                        destructive=destructive,
                        idempotent=idempotent,
                        open_world=open_world,
                    ),
                    action=action,
                    recovery_hint=recovery_hint,
                )
            )
            return func

        return decorator

    def resource(
        self,
        name: str,
        uri: str,
        *,
        title: str,
        description: str,
        mime_type: str = "application/json",
        list_handler: Optional[Callable[[], Any]] = None,
        recovery_hint: Optional[str] = None,
    ):
        """Decorator registering an async handler as a resource or template."""

        def decorator(func: Callable) -> Callable:
            self.add_resource(
                ResourceMeta(
                    name=name,
                    uri=uri,
                    title=title,
                    description=description,
                    handler=func,
                    mime_type=mime_type,
                    list_handler=list_handler,
                    recovery_hint=recovery_hint,
                )
            )
            return func

        return decorator

    def prompt(
        self,
        name: str,
        *,
        title: str,
        description: str,
        argument_model: type[BaseModel],
    ):
        """Decorator registering a render function as a prompt."""

        def decorator(func: Callable) -> Callable:
            self.add_prompt(
                PromptMeta(
                    name=name,
                    title=title,
                    description=description,
                    argument_model=argument_model,
                    render=func,
                )
            )
            return func

        return decorator

    def build(self) -> Registry:
        return Registry(self._tools, self._resources, self._prompts)
