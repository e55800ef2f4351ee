"""Shorthand expansion engine.

Grouping extraction, sibling and descendant splitting, and leaf expansion.
The driver in ``expand_emmet`` wires them into ``expand`` and ``expand_single``.
"""
