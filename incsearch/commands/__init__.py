"""CLI command implementations for incsearch."""
