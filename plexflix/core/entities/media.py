"""
Media library entities.

Entities representing what the media server exposes: library sections
and the titles they contain.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MediaItem:
    """
    A title known to the local media library.

    Immutable input of the reconciliation pipeline.

    Attributes:
        title: Title as stored in the library (may carry a "(YYYY)" suffix)
        year: Release year, 0 when the library does not know it
    """

    title: str
    year: int = 0


@dataclass(frozen=True)
class Library:
    """
    Library section of the media server.

    Attributes:
        key: Section key used to list its content
        title: Display name of the section
        kind: Section type reported by the server ("movie", "show", ...)
    """

    key: str
    title: str
    kind: str = ""
