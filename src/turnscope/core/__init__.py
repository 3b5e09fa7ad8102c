"""
Core modules for turnscope.

- domain: immutable word records and the transcript container
- analysis: analytics derived from the revealed word stream
- utils: configuration, logging and time helpers
"""
