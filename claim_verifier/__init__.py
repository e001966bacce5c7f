"""Claim verification: routing, evidence retrieval, verdicts and self-critique."""

__version__ = "0.1.0"
