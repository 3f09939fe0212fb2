"""Upstream trend feed fetchers."""
