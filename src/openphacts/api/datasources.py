"""Data sources loaded into the platform."""

from __future__ import annotations

from openphacts.transport import ApiResponse

from .base import ResourceClient


class DataSourcesClient(ResourceClient):
    def sources(self) -> ApiResponse:
        """Description of the loaded datasets; the result is passed through unchanged."""
        return self._get("/sources", use_lens=False)
