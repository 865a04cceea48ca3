"""Exception types raised by the viewer."""


class ArtworksViewerError(Exception):
    """Base exception for viewer errors."""
    pass


class ArtworkApiError(ArtworksViewerError):
    """Raised when a page of artworks cannot be fetched or decoded."""
    pass


class SelectionStoreError(ArtworksViewerError):
    """Raised when the selection cannot be written to local storage."""
    pass
