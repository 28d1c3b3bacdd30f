"""
Command-line interface for attribute-reader.

Provides commands for reading attribute records from DescribeFeatureType
documents and inspecting their feature types.
"""

from .main import app, main

__all__ = ["main", "app"]
