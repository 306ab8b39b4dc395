"""Command line interface for edit_in_place.

This package provides command-line access to field rendering, to the
registered field types and middlewares, and to configuration file checks.
"""
