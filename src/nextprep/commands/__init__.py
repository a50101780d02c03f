"""CLI plumbing — Click base classes and the shared application context."""
