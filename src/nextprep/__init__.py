"""nextprep — opinionated setup for freshly created Next.js projects."""

__version__ = "0.3.0"
