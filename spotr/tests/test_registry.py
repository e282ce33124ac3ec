"""Tests for the tool/resource/prompt registry."""

from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel, ConfigDict, Field

from shared.toolkit import (
    ListedResource,
    NotRegisteredError,
    Ok,
    RegistryBuilder,
)
from spotr.errors import NotFoundError


class EchoInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    word: str = Field(min_length=1, description="Word to echo")
    times: int = Field(default=1, ge=1, le=3)


def _echo_builder(handler):
    builder = RegistryBuilder()
    builder.tool(
        "echo",
        title="Echo",
        description="Echo a word",
        input_model=EchoInput,
        read_only=True,
        action="echoing",
        recovery_hint="Call list-words to find a valid word.",
    )(handler)
    return builder


@pytest.mark.asyncio
async def test_call_tool_validates_then_runs_handler():
    """A valid call reaches the handler with the parsed model."""
    handler = AsyncMock(return_value=Ok("echoed", {"word": "hi"}))
    registry = _echo_builder(handler).build()

    envelope = await registry.call_tool("echo", {"word": "hi", "times": 2})

    assert not envelope.is_error
    params = handler.await_args.args[0]
    assert params.word == "hi"
    assert params.times == 2


@pytest.mark.asyncio
async def test_invalid_arguments_never_reach_handler():
    """Validation failures short-circuit before the handler runs."""
    handler = AsyncMock(return_value=Ok("echoed"))
    registry = _echo_builder(handler).build()

    envelope = await registry.call_tool("echo", {"word": "", "times": 9, "extra": True})

    assert envelope.is_error
    assert handler.await_count == 0
    assert envelope.text.startswith("Error echoing: Invalid input")
    assert "- word:" in envelope.text
    assert "- times:" in envelope.text
    assert "- extra:" in envelope.text


@pytest.mark.asyncio
async def test_handler_exception_becomes_error_envelope():
    """A ToolError in a handler should become an error envelope."""
    handler = AsyncMock(side_effect=NotFoundError("word", "hi"))
    registry = _echo_builder(handler).build()

    envelope = await registry.call_tool("echo", {"word": "hi"})

    assert envelope.is_error
    assert "Word 'hi' was not found" in envelope.text
    assert "Call list-words to find a valid word." in envelope.text


@pytest.mark.asyncio
async def test_unexpected_exception_is_not_leaked():
    """Unexpected handler exceptions should render generically."""
    handler = AsyncMock(side_effect=KeyError("secret-column"))
    registry = _echo_builder(handler).build()

    envelope = await registry.call_tool("echo", {"word": "hi"})

    assert envelope.is_error
    assert "secret-column" not in envelope.text


@pytest.mark.asyncio
async def test_unknown_tool_returns_error_envelope():
    """Calling an unknown tool should return an error envelope."""
    registry = RegistryBuilder().build()

    envelope = await registry.call_tool("does-not-exist", {})

    assert envelope.is_error
    assert "No tool registered as 'does-not-exist'" in envelope.text


def test_duplicate_tool_is_rejected():
    """Registering a tool name twice should fail."""
    builder = _echo_builder(AsyncMock())

    with pytest.raises(ValueError, match="already registered"):
        builder.tool("echo", title="Echo", description="Again")(AsyncMock())


def test_duplicate_resource_uri_is_rejected():
    """Registering a resource URI twice should fail."""
    builder = RegistryBuilder()
    builder.resource("a", "thing://{id}", title="A", description="A")(AsyncMock())

    with pytest.raises(ValueError, match="already registered"):
        builder.resource("b", "thing://{id}", title="B", description="B")(AsyncMock())


def test_built_registry_is_read_only():
    """The built registry tables should be read-only."""
    registry = _echo_builder(AsyncMock()).build()

    with pytest.raises(TypeError):
        registry.tools["other"] = registry.tools["echo"]


def test_lookup_of_unknown_prompt_raises():
    """Looking up an unknown prompt should raise NotRegisteredError."""
    registry = RegistryBuilder().build()

    with pytest.raises(NotRegisteredError):
        registry.prompt("missing")


@pytest.mark.asyncio
async def test_static_resource_wins_over_template():
    """A static URI should win over a matching template."""
    builder = RegistryBuilder()
    builder.resource("template", "items://{item_id}", title="Item", description="Item")(
        AsyncMock(return_value={"kind": "template"})
    )
    builder.resource("library", "items://library", title="Library", description="All")(
        AsyncMock(return_value={"kind": "static"})
    )
    registry = builder.build()

    contents = await registry.read_resource("items://library")

    assert contents[0].mime_type == "application/json"
    assert '"kind": "static"' in contents[0].text


@pytest.mark.asyncio
async def test_template_variables_are_passed_to_handler():
    """Template variables should be passed to the handler."""
    handler = AsyncMock(return_value={"id": "x"})
    builder = RegistryBuilder()
    builder.resource(
        "progress", "client://{client_id}/programs/{program_id}/progress", title="P", description="P"
    )(handler)
    registry = builder.build()

    await registry.read_resource("client://c-1/programs/p-1/progress")

    handler.assert_awaited_once_with(client_id="c-1", program_id="p-1")


@pytest.mark.asyncio
async def test_resource_failure_renders_plain_text():
    """A failing resource should render as plain text."""
    builder = RegistryBuilder()
    builder.resource(
        "item",
        "items://{item_id}",
        title="Item",
        description="Item",
        recovery_hint="List the items first.",
    )(AsyncMock(side_effect=NotFoundError("item", "x")))
    registry = builder.build()

    contents = await registry.read_resource("items://x")

    assert contents[0].mime_type == "text/plain"
    assert contents[0].text.startswith("Error reading items://x: Item 'x' was not found")
    assert "List the items first." in contents[0].text


@pytest.mark.asyncio
async def test_unknown_resource_uri_raises():
    """Reading an unknown URI should raise NotRegisteredError."""
    registry = RegistryBuilder().build()

    with pytest.raises(NotRegisteredError):
        await registry.read_resource("nowhere://at-all")


@pytest.mark.asyncio
async def test_list_resources_includes_template_listings():
    """list_resources should include template listings."""
    builder = RegistryBuilder()
    builder.resource("library", "items://library", title="Library", description="All")(AsyncMock())
    builder.resource(
        "by-color",
        "items://color/{color}",
        title="By color",
        description="Items of one color",
        list_handler=lambda: [
            ListedResource(uri="items://color/red", name="Red"),
            ListedResource(uri="items://color/blue", name="Blue"),
        ],
    )(AsyncMock())
    registry = builder.build()

    listed = await registry.list_resources()

    assert [r.uri for r in listed] == ["items://library", "items://color/red", "items://color/blue"]
