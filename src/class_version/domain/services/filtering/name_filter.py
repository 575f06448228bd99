#!/usr/bin/env python3

"""Substring filter over qualified class names."""

from collections.abc import Sequence


def should_include(qualified_name: str, patterns: Sequence[str]) -> bool:
    """Decide whether a class with this qualified name is kept.

    Matching is a plain, case-sensitive substring search: no anchoring and no
    wildcard syntax. An empty pattern list keeps everything.

    Args:
        qualified_name: Fully qualified class name (e.g. 'ns::Foo')
        patterns: Substrings, any one of which keeps the name

    Returns:
        True if the name should be recorded
    """
    if not patterns:
        return True

    return any(pattern in qualified_name for pattern in patterns)
