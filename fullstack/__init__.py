"""Fullstack aggregator — hierarchical build orchestration."""

__version__ = "0.1.0"
