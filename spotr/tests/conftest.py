"""Shared fixtures for Spotr tests."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from spotr.backend import MockStore, SpotrClient
from spotr.config import Settings
from spotr.main import build_registry


@pytest.fixture
def settings(tmp_path):
    return Settings(
        base_url="https://api.spotr.test",
        api_key="test-key",
        web_app_url="https://app.spotr.test",
        mock_data_dir=Path(tmp_path),
    )


@pytest.fixture
def backend():
    """A SpotrClient stand-in whose coroutines record every call."""
    return AsyncMock(spec=SpotrClient)


@pytest.fixture
def registry(backend, settings):
    return build_registry(backend, settings)


@pytest.fixture
def store(tmp_path):
    return MockStore(tmp_path / "mock-data", web_app_url="https://app.spotr.test")


@pytest.fixture
def program_payload():
    """The 8-Week Strength program used across tests."""
    return {
        "name": "8-Week Strength",
        "days": [
            {
                "day_number": 1,
                "blocks": [
                    {
                        "order_index": 0,
                        "format_type": "standard",
                        "exercises": [
                            {
                                "order_index": 0,
                                "exercise_name": "Bench Press",
                                "modifiable_parameters": {"sets": 3, "reps": "8-10"},
                            }
                        ],
                    }
                ],
            }
        ],
    }
