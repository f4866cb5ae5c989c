"""In-memory and shared store primitives."""
