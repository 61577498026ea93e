"""Shared Kernel module.

Components every layer may depend on. Today that is only the observation
context bound into domain probes; anything added here must stay free of
framework and storage imports.
"""
