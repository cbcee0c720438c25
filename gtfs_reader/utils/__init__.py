"""General utilities for gtfs_reader."""
