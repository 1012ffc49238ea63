"""Utility modules for incsearch.

- logging: rotating file logging that stays out of the TUI's way
"""
