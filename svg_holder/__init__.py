"""SVG Holder API: CRUD and search over uploaded SVG assets."""

__version__ = "0.1.0"
