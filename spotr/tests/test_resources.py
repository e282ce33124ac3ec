"""Tests for the Spotr resources."""

import inspect
import json

import pytest

from spotr.errors import NotFoundError

LIBRARY = {
    "movements": {
        "Chest": [{"name": "Bench Press", "variation": "Barbell", "client_demo": "https://videos/bench"}],
        "Legs": [{"name": "Back Squat", "variation": "High Bar", "client_demo": None}],
    }
}


@pytest.mark.asyncio
async def test_muscle_group_listing_has_six_addresses(registry):
    """list_resources should expand the muscle-group template into six addresses."""
    listed = await registry.list_resources()
    groups = [r.uri for r in listed if r.uri.startswith("movements://muscle-group/")]

    assert groups == [
        "movements://muscle-group/Chest",
        "movements://muscle-group/Back",
        "movements://muscle-group/Shoulders",
        "movements://muscle-group/Arms",
        "movements://muscle-group/Legs",
        "movements://muscle-group/Core",
    ]
    assert "movements://library" in [r.uri for r in listed]


def test_templates_are_registered(registry):
    """Every parameterised resource should be listed as a template."""
    templates = {r.uri for r in registry.resource_templates()}

    assert templates == {
        "movements://muscle-group/{group}",
        "program://{program_id}",
        "blueprint://{blueprint_id}",
        "coach://{coach_id}/profile",
        "coach://{coach_id}/style",
        "client://{client_id}/profile",
        "client://{client_id}/programs/{program_id}/progress",
    }


@pytest.mark.asyncio
async def test_library_resource_returns_json(registry, backend):
    """movements://library should return the backend library as JSON."""
    backend.fetch_all_movements.return_value = LIBRARY

    contents = await registry.read_resource("movements://library")

    assert contents[0].mime_type == "application/json"
    assert json.loads(contents[0].text) == LIBRARY


@pytest.mark.asyncio
async def test_muscle_group_resource_filters_library(registry, backend):
    """A muscle-group read should return only that group."""
    backend.fetch_all_movements.return_value = LIBRARY

    contents = await registry.read_resource("movements://muscle-group/Chest")

    movements = json.loads(contents[0].text)
    assert [m["name"] for m in movements] == ["Bench Press"]


@pytest.mark.asyncio
async def test_unknown_muscle_group_is_an_error(registry, backend):
    """Unknown muscle groups should be rejected without a backend call."""
    contents = await registry.read_resource("movements://muscle-group/Glutes")

    assert contents[0].mime_type == "text/plain"
    assert "Unknown muscle group 'Glutes'" in contents[0].text
    assert backend.fetch_all_movements.await_count == 0


@pytest.mark.asyncio
async def test_coach_style_resource(registry, backend):
    """coach style reads should call fetch_coach_style."""
    backend.fetch_coach_style.return_value = {"approach": "Block periodization"}

    contents = await registry.read_resource("coach://coach-1/style")

    backend.fetch_coach_style.assert_awaited_once_with("coach-1")
    assert json.loads(contents[0].text) == {"approach": "Block periodization"}


@pytest.mark.asyncio
async def test_client_progress_resource(registry, backend):
    """client progress reads should pass both IDs to the backend."""
    backend.fetch_client_progress.return_value = {"sessions": 10}

    await registry.read_resource("client://client-1/programs/program-1/progress")

    backend.fetch_client_progress.assert_awaited_once_with("client-1", "program-1")


@pytest.mark.asyncio
async def test_missing_program_resource_renders_text(registry, backend):
    """A missing program should render as text with a recovery hint."""
    backend.fetch_program.side_effect = NotFoundError("program", "program-404")

    contents = await registry.read_resource("program://program-404")

    assert contents[0].mime_type == "text/plain"
    assert "Error reading program://program-404" in contents[0].text
    assert "fetch-all-programs" in contents[0].text


@pytest.mark.asyncio
async def test_malformed_library_is_a_backend_error(registry, backend):
    """A library that fails validation should read as a backend failure."""
    backend.fetch_all_movements.return_value = {"movements": {"Chest": "not a list"}}

    contents = await registry.read_resource("movements://muscle-group/Chest")

    assert contents[0].mime_type == "text/plain"
    assert "Spotr API request failed (malformed movement library)" in contents[0].text
    assert "unexpected internal error" not in contents[0].text


def test_resource_handlers_declare_return_types(registry):
    """Every resource handler should annotate what it returns."""
    for meta in registry.resources.values():
        signature = inspect.signature(meta.handler)
        assert signature.return_annotation is not inspect.Signature.empty, meta.name
