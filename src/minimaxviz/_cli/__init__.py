"""Command line interface for minimaxviz."""
