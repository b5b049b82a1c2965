"""Command implementations for the sbomgraph CLI."""
