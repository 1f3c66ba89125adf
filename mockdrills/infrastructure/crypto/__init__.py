"""Cryptographer implementations."""
