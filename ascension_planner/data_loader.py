"""Utilities for retrieving Star Rail game data from StarRailRes."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Mapping

import requests

from .config import DATA_URLS, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RemoteDataLoader:
    """Fetches JSON datasets and keeps each one for the life of the loader."""

    session: requests.Session | None = None
    urls: Mapping[str, str] = field(default_factory=lambda: DATA_URLS.copy())
    timeout: float = REQUEST_TIMEOUT
    _session: requests.Session = field(init=False, repr=False)
    _cache: Dict[str, Any] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._session = self.session or requests.Session()

    def fetch_json(self, name: str) -> Any:
        """Return the parsed JSON for ``name`` from the configured URLs."""

        if name not in self.urls:
            raise KeyError(f"Unknown dataset: {name}")
        if name not in self._cache:
            url = self.urls[name]
            logger.info("Fetching %s from %s", name, url)
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            self._cache[name] = response.json()
        return self._cache[name]
