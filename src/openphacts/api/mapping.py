"""Identifier mapping via ``/mapUri``."""

from __future__ import annotations

from openphacts.normalize.utils import EXACT_MATCH, PRIMARY_TOPIC, lookup, require, to_sequence
from openphacts.transport import ApiResponse

from .base import ResourceClient


def parse_map(result: object) -> list[object]:
    """URIs equivalent to the requested one."""
    return to_sequence(lookup(require(result, PRIMARY_TOPIC), EXACT_MATCH))


class MapClient(ResourceClient):
    def map_uri(
        self,
        uri: str,
        target_uri_pattern: str | None = None,
        graph: str | None = None,
        lens_uri: str | None = None,
    ) -> ApiResponse:
        """Map ``uri`` to equivalent URIs.

        The lens is sent as ``lensUri`` here rather than ``_lens``.
        """
        return self._get(
            "/mapUri",
            {
                "Uri": uri,
                "targetUriPattern": target_uri_pattern,
                "graph": graph,
                "lensUri": lens_uri,
            },
            use_lens=False,
        )
