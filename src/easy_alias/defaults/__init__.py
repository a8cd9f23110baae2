"""Packaged YAML defaults for easy-alias."""
