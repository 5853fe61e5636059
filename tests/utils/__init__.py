"""
Test utilities for plugin localization tests.

This package provides helper functions for building plugin directories,
language packs and configuration files in temporary locations.
"""
