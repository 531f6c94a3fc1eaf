"""Response caching: store, writer and lookup middleware."""
