"""Kernel – errors and schema metadata shared by every layer."""
