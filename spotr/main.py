"""Spotr MCP server: stdio binding and command line entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from shared.toolkit import (
    InputValidationError,
    Registry,
    RegistryBuilder,
    generate_catalog_markdown,
)
from spotr.backend import Backend, SpotrClient, create_backend
from spotr.config import Settings
from spotr.errors import ConfigurationError
from spotr.prompts import register_prompts
from spotr.resources import register_resources
from spotr.tools import register_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "spotr"
SERVER_DESCRIPTION = "Fitness coaching tools for programs, movements, blueprints and progress analyses"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

INSTRUCTIONS = """You are working with Spotr, a platform coaches use to design training programs for their clients.

Core workflow:
1. Read the coach (coach://{coach_id}/profile, coach://{coach_id}/style) and client (client://{client_id}/profile) resources to understand who you are programming for.
2. Fetch the movement library (fetch-all-movements or movements://library) before prescribing exercises.
3. Create programs with create-program; refine them with update-program, which only changes what you send.
4. Programs and blueprints are addressed by ID. If you do not have an ID, call fetch-all-programs or fetch-all-blueprints.
5. Store progress analyses and evaluations with store-progress-analysis and evaluate-program, and share results with generate-share-link.

Every tool returns a confirmation followed by the JSON record. Errors begin with "Error" and say how to fix the call."""


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr only; stdout carries the MCP stdio transport."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


def build_registry(backend: Backend, settings: Settings) -> Registry:
    builder = RegistryBuilder()
    register_all_tools(builder, backend, settings)
    register_resources(builder, backend, settings)
    register_prompts(builder)
    return builder.build()


def _tool_definition(meta) -> types.Tool:
    hints = meta.annotations
    return types.Tool(
        name=meta.name,
        title=meta.title,
        description=meta.description,
        inputSchema=meta.input_schema(),
        annotations=types.ToolAnnotations(
            title=meta.title,
            readOnlyHint=hints.read_only,
            destructiveHint=hints.destructive,
            idempotentHint=hints.idempotent,
            openWorldHint=hints.open_world,
        ),
    )


def create_server(registry: Registry) -> Server:
    """Bind the registry to a low-level MCP server."""
    server = Server(SERVER_NAME, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [_tool_definition(meta) for meta in registry.tools.values()]

    # Input validation happens in the registry so errors share one envelope format.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        envelope = await registry.call_tool(name, arguments)
        content = [types.TextContent(type="text", text=item.as_text()) for item in envelope.content]
        return types.CallToolResult(content=content, isError=envelope.is_error)

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        resources = []
        for meta in registry.static_resources():
            resources.append(
                types.Resource(
                    uri=meta.uri,
                    name=meta.name,
                    title=meta.title,
                    description=meta.description,
                    mimeType=meta.mime_type,
                )
            )
        static_uris = {meta.uri for meta in registry.static_resources()}
        for listed in await registry.list_resources():
            if listed.uri in static_uris:
                continue
            resources.append(
                types.Resource(
                    uri=listed.uri,
                    name=listed.name,
                    description=listed.description,
                    mimeType="application/json",
                )
            )
        return resources

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=meta.uri,
                name=meta.name,
                title=meta.title,
                description=meta.description,
                mimeType=meta.mime_type,
            )
            for meta in registry.resource_templates()
        ]

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        contents = await registry.read_resource(str(uri))
        return [ReadResourceContents(content=c.text, mime_type=c.mime_type) for c in contents]

    @server.list_prompts()
    async def list_prompts() -> list[types.Prompt]:
        return [
            types.Prompt(
                name=meta.name,
                title=meta.title,
                description=meta.description,
                arguments=[types.PromptArgument(**arg) for arg in meta.arguments()],
            )
            for meta in registry.prompts.values()
        ]

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[dict[str, str]]) -> types.GetPromptResult:
        meta = registry.prompt(name)
        try:
            text = meta.get(arguments)
        except InputValidationError as exc:
            raise ValueError(exc.describe()) from None
        return types.GetPromptResult(
            description=meta.description,
            messages=[
                types.PromptMessage(role="user", content=types.TextContent(type="text", text=text))
            ],
        )

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server over stdio until the transport closes."""
    backend = create_backend(settings)
    registry = build_registry(backend, settings)
    server = create_server(registry)
    logger.info(
        f"Starting Spotr MCP server ({len(registry.tools)} tools, "
        f"{len(registry.resources)} resources, {len(registry.prompts)} prompts)"
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        logger.info("Spotr MCP server stopped")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spotr-mcp", description=SERVER_DESCRIPTION)
    parser.add_argument(
        "--mock",
        action="store_true",
        default=None,
        help="Use the local JSON mock store instead of the Spotr API",
    )
    parser.add_argument("--mock-data-dir", type=Path, help="Directory holding the mock JSON files")
    parser.add_argument("--log-level", help="Logging level (default: SPOTR_LOG_LEVEL or INFO)")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print a markdown catalog of tools, resources and prompts, then exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if args.catalog:
        settings = Settings(base_url=None, api_key=None)
        registry = build_registry(SpotrClient("http://localhost", ""), settings)
        print(generate_catalog_markdown(registry, SERVER_NAME, SERVER_DESCRIPTION))
        return 0

    try:
        settings = Settings.from_env(
            mock_mode=args.mock,
            mock_data_dir=args.mock_data_dir,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return 0
    except Exception:
        logger.exception("Spotr MCP server failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
