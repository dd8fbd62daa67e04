"""
Configuration module.

Frozen default parameters, YAML-backed per-symbol overrides and validation.
"""
