"""Tests for markdown catalog generation."""

from shared.toolkit import generate_catalog_markdown


def test_catalog_header(registry):
    """The catalog should open with the server name and description."""
    catalog = generate_catalog_markdown(registry, "spotr", "Fitness coaching tools")

    assert catalog.startswith("---")
    assert "name: spotr" in catalog
    assert "description: Fitness coaching tools" in catalog


def test_catalog_lists_tool_params(registry):
    """Tool parameters should list type, requirement and bounds."""
    catalog = generate_catalog_markdown(registry, "spotr", "Fitness coaching tools")

    assert "### search-exercises" in catalog
    assert "- limit: integer, optional, min 1, max 100" in catalog
    assert "### delete-program" in catalog
    assert "(destructive, idempotent)" in catalog
    assert "- program_id: string, required" in catalog


def test_catalog_lists_resources_and_prompts(registry):
    """Resources and prompts should each get a section."""
    catalog = generate_catalog_markdown(registry, "spotr", "Fitness coaching tools")

    assert "`movements://muscle-group/{group}`" in catalog
    assert "- analyze-progress-prompt(client_id, client_name, program_id, program_name, timeframe)" in catalog
