"""UI package for incsearch terminal user interfaces.

The search controller and its building blocks live in `incsearch.ui.search`;
the Textual widgets there are thin adapters over the controller.
"""
