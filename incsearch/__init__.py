"""
incsearch - incremental, paged GitHub user search for the terminal
"""

__version__ = "0.1.0"
