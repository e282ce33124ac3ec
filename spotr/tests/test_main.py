"""Tests for server wiring and the command line entry point."""

import logging
import sys
from importlib.metadata import version

import pytest
from mcp.server import Server

from spotr import main as spotr_main
from spotr.main import build_registry, configure_logging, create_server


def test_build_registry_counts(backend, settings):
    """build_registry should register every tool, resource and prompt."""
    registry = build_registry(backend, settings)

    assert len(registry.tools) == 13
    assert len(registry.resources) == 8
    assert len(registry.prompts) == 5


def test_create_server_returns_named_server(registry):
    """create_server should return an MCP server named spotr."""
    server = create_server(registry)

    assert isinstance(server, Server)
    assert server.name == "spotr"


def test_configure_logging_writes_to_stderr():
    """configure_logging should install a single stderr handler."""
    configure_logging("debug")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stderr
    assert logging.getLogger().level == logging.DEBUG


def test_catalog_flag_prints_markdown(capsys):
    """--catalog should print the catalog and exit 0."""
    assert spotr_main.main(["--catalog"]) == 0

    out = capsys.readouterr().out
    assert "### create-program" in out


def test_missing_configuration_exits_1(monkeypatch):
    """main should exit 1 when configuration is missing."""
    monkeypatch.delenv("SPOTR_BASE_URL", raising=False)
    monkeypatch.delenv("SPOTR_API_KEY", raising=False)
    monkeypatch.delenv("SPOTR_MOCK_MODE", raising=False)

    assert spotr_main.main([]) == 1


def test_keyboard_interrupt_exits_0(monkeypatch, tmp_path):
    """main should exit 0 on Ctrl-C."""
    def interrupted(coro):
        coro.close()
        raise KeyboardInterrupt

    monkeypatch.setattr(spotr_main.asyncio, "run", interrupted)

    assert spotr_main.main(["--mock", "--mock-data-dir", str(tmp_path)]) == 0


@pytest.mark.parametrize("argv", [["--mock"], ["--mock", "--log-level", "warning"]])
def test_parse_args(argv):
    """parse_args should accept each supported flag."""
    args = spotr_main.parse_args(argv)

    assert args.mock is True
    assert not args.catalog


def test_bad_log_level_exits_1(monkeypatch, tmp_path):
    """main should exit 1 instead of crashing on an unknown log level."""
    monkeypatch.setenv("SPOTR_LOG_LEVEL", "foo")

    assert spotr_main.main(["--mock", "--mock-data-dir", str(tmp_path)]) == 1


def test_mcp_sdk_is_a_1x_release():
    """The low-level server API used here is the 1.x one."""
    assert version("mcp").split(".")[0] == "1"
