"""Command-line interface for turnscope."""
