"""Backend integrations: the Spotr REST API and a local JSON mock store."""

import logging
from typing import Union

from spotr.backend.client import SpotrClient
from spotr.backend.mock_store import MockStore
from spotr.config import Settings

logger = logging.getLogger(__name__)

Backend = Union[SpotrClient, MockStore]


def create_backend(settings: Settings) -> Backend:
    if settings.mock_mode:
        logger.info("Mock mode enabled, reading and writing local JSON files")
        return MockStore(settings.mock_data_dir, web_app_url=settings.web_app_url)
    return SpotrClient(settings.base_url, settings.api_key, timeout=settings.timeout)


__all__ = ["Backend", "MockStore", "SpotrClient", "create_backend"]
