"""Command implementations for the sysconfigdata CLI."""
