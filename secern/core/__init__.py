"""Secern core — pattern matching, stream driving and shutdown handling."""
