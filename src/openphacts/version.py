"""Library metadata."""

from __future__ import annotations

__version__ = "6.1.3"

# Version of the Linked Data API the clients are written against
LDA_VERSION = "1.5"


def information() -> dict[str, str]:
    """Return library metadata."""
    return {
        "version": __version__,
        "title": "openphacts",
        "project": "Open PHACTS",
        "description": "Client library for the Open PHACTS Linked Data API",
        "LDA-version": LDA_VERSION,
    }
