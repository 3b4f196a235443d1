"""In-memory key-value store, ZSP protocol codec and an asyncio ZSP server."""

__version__ = "0.1.0"