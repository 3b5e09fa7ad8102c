"""
Analytics derived from the normalized word stream.

Modules:
- counting: repeat counting (first-word / last-word modes)
- grouping: per-speaker and per-turn views, cloud ordering
- fingerprints: per-speaker behavioural profiles
- qa_pairs: question/answer pairing
- word_journey: occurrences of a search term over time
- turn_network: speaker-to-speaker transition graph
- stats: aggregate transcript statistics
- engine: reveal cursor, caching and the public entry points
"""
