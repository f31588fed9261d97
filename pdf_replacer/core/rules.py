"""Replacement rules: loading the rule list and applying it to text."""

import json
import logging
import os

from ..exceptions import RuleListError

logger = logging.getLogger(__name__)


class ReplacementRule:
    """Replace every occurrence of ``key`` with ``value``."""

    __slots__ = ("key", "value")

    def __init__(self, key, value):
        self.key = key
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, ReplacementRule):
            return NotImplemented
        return (self.key, self.value) == (other.key, other.value)

    def __repr__(self):
        return f"ReplacementRule(key={self.key!r}, value={self.value!r})"


def apply_rules(text, rules):
    """
    Apply rules to text in list order.

    Each rule replaces all occurrences of its key, and later rules see the
    output of earlier ones.

    Args:
        text (str): Decoded text.
        rules (list): ReplacementRule objects.

    Returns:
        tuple: (new text, True if any rule matched).
    """
    modified = False
    for rule in rules:
        if rule.key in text:
            text = text.replace(rule.key, rule.value)
            modified = True
    return text, modified


def parse_rules(data):
    """
    Build the rule list from its JSON text.

    Args:
        data (str or bytes): A JSON array of ``{"key": ..., "value": ...}`` objects.

    Returns:
        list: ReplacementRule objects in input order.

    Raises:
        RuleListError: If the data is not a valid rule list.
    """
    try:
        items = json.loads(data)
    except (ValueError, UnicodeDecodeError) as e:
        raise RuleListError(f"Rule list is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise RuleListError("Rule list must be a JSON array")

    rules = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise RuleListError(f"Rule #{index} is not an object")
        key = item.get("key")
        value = item.get("value")
        if not isinstance(key, str) or not isinstance(value, str):
            raise RuleListError(f"Rule #{index} needs string 'key' and 'value' fields")
        if not key:
            raise RuleListError(f"Rule #{index} has an empty key")
        rules.append(ReplacementRule(key, value))
    return rules


def load_rules(source):
    """
    Load the rule list from a file path or a readable stream.

    Args:
        source: Path to a JSON file, or a text/binary stream read until EOF.

    Returns:
        list: ReplacementRule objects.
    """
    if isinstance(source, (str, bytes, os.PathLike)):
        try:
            with open(source, "rb") as f:
                data = f.read()
        except OSError as e:
            raise RuleListError(f"Unable to read rule list {source}: {e}") from e
    else:
        # Prefer the underlying binary buffer so stdin and files decode the same way
        stream = getattr(source, "buffer", source)
        data = stream.read()
        if isinstance(data, str):
            data = data.encode("utf-8")

    rules = parse_rules(data)
    logger.info("Loaded %d replacement rules", len(rules))
    return rules
