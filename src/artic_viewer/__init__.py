"""
Artic Artworks Viewer
=====================

Paginated table viewer for the Art Institute of Chicago artwork catalog with:
- Server-side pagination over the public artworks API
- Row selection that survives page changes
- Selection persisted to a local key-value file
- Side panel listing the selected artworks

Architecture:
- api/: HTTP fetch adapter and response models
- selection/: Selection map operations and local persistence
- table/: Pagination state, formatting and the view controller
- ui/: Streamlit interface
"""

__version__ = "1.0.0"
