"""DeckForge: turn documents and images into rendered slide decks."""

__version__ = "0.1.0"
