"""Tools for rendering and publishing trace reports."""
