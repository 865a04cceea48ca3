"""
UI Module
=========

Streamlit interface for the artworks table:
- Toolbar with selection counter and page-level select/deselect
- Artworks table with checkbox selection
- Paginator
- Side panel with the cross-page selection
"""
