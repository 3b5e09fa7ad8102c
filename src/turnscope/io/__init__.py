"""
Input handling for turnscope: text, subtitle, table and code-file parsers,
timing-mode rules and the transcript factory.
"""
