"""Concrete adapters for the interfaces in ``newsfeed.interfaces``."""
