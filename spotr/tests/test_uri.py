"""Tests for URI templates."""

import pytest

from shared.toolkit import UriTemplate


def test_static_uri_is_not_a_template():
    """A URI without variables should not be a template."""
    template = UriTemplate("movements://library")

    assert not template.is_template
    assert template.match("movements://library") == {}
    assert template.match("movements://library/extra") is None


def test_match_extracts_variables():
    """match should extract template variables."""
    template = UriTemplate("client://{client_id}/programs/{program_id}/progress")

    assert template.variables == ["client_id", "program_id"]
    assert template.match("client://c-1/programs/p-2/progress") == {
        "client_id": "c-1",
        "program_id": "p-2",
    }


def test_variables_match_a_single_segment():
    """Variables should not match across slashes."""
    template = UriTemplate("program://{program_id}")

    assert template.match("program://a/b") is None
    assert template.match("program://") is None


def test_expand_fills_variables():
    """expand should fill in variables."""
    template = UriTemplate("coach://{coach_id}/style")

    assert template.expand(coach_id="coach-9") == "coach://coach-9/style"


def test_expand_requires_every_variable():
    """expand should require every variable."""
    with pytest.raises(KeyError):
        UriTemplate("coach://{coach_id}/style").expand()
