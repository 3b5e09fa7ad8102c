"""Shared utilities for turnscope core modules."""
