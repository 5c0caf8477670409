"""Core rendering, document access and viewer state."""
