"""wordtally — daily net word-count tracking for documents you edit."""

__version__ = "0.1.0"
