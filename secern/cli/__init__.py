"""Secern CLI — Typer-based command-line interface.

Provides the ``secern`` command: sift stdin into sink files, validate a
configuration, or write an example configuration.

Tables use Rich; diagnostics go through ``logging`` with a Rich handler on
STDERR so STDOUT carries only passthrough data.
"""
