"""Core parsing engine and git command layer."""
