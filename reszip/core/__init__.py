"""Core layer: session, fetching, batching and archiving."""
