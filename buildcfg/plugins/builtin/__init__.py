"""Plugins shipped with buildcfg."""
