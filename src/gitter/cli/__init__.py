"""Command line interface for gitter."""
