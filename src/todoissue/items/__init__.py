"""Marker items and issue body rendering."""

from todoissue.items.body import permalink, render_body
from todoissue.items.models import MarkerItem

__all__ = ["MarkerItem", "permalink", "render_body"]
