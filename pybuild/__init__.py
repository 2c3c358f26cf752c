"""Readers and analyzers for Build engine game files."""
