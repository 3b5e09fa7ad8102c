"""
Test suite for turnscope.

Tests mirror the package layout:

- core/: time utilities, config, domain records, logger
- io/: parsers, column mapping, code files, transcript loading
- analysis/: repeat counting and the derived views of the analytics engine
- cli/: Typer commands driven through CliRunner
- fixtures/: transcript, subtitle and code files used by the tests
"""
