"""Command implementations for the sizeanalyzer CLI."""
