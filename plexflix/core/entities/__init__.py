"""
Business entities representing core domain concepts.

Exports:
- MediaItem: A (title, year) pair from the media library
- Library: A library section of the media server
"""

from plexflix.core.entities.media import Library, MediaItem

__all__ = [
    "Library",
    "MediaItem",
]
