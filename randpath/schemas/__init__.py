"""Packaged JSON schemas for randpath input files."""
