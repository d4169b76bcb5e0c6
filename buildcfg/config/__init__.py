"""Configuration loading and merging."""
