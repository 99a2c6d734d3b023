"""Slime mold (Physarum) network simulation."""

__version__ = "0.1.0"
