"""
Anchor resolution for code snippets.

A snippet names an anchor in its target file: ``insert_after`` or
``insert_before``. An anchor is tried as a literal substring first and
then as a multiline regular expression; the first match wins.
"""

import re
from typing import Optional

from .schema import CodeSnippet


class AnchorNotFoundError(Exception):
    """The snippet's anchor does not occur in the target content."""

    def __init__(self, snippet_id: str, anchor: str, target_file: str = ""):
        where = f" in {target_file}" if target_file else ""
        super().__init__(f"Anchor {anchor!r} of snippet '{snippet_id}' not found{where}")
        self.snippet_id = snippet_id
        self.anchor = anchor
        self.target_file = target_file


def _locate(content: str, anchor: str) -> Optional[tuple]:
    """Return the (start, end) span of the first match of an anchor."""
    index = content.find(anchor)
    if index >= 0:
        return index, index + len(anchor)
    try:
        match = re.search(anchor, content, re.MULTILINE)
    except re.error:
        return None
    if match is None:
        return None
    return match.start(), match.end()


def find_insertion_offset(content: str, snippet: CodeSnippet) -> int:
    """
    Compute where a snippet goes inside a target file.

    Args:
        content: Current text of the target file
        snippet: Snippet carrying the anchor

    Returns:
        Character offset; always the start of a line

    Raises:
        AnchorNotFoundError: If there is no anchor or it does not match
    """
    anchor = snippet.insert_after or snippet.insert_before
    if not anchor:
        raise AnchorNotFoundError(snippet.id, "", snippet.target_file)

    span = _locate(content, anchor)
    if span is None:
        raise AnchorNotFoundError(snippet.id, anchor, snippet.target_file)
    start, end = span

    if snippet.insert_after:
        # Line holding the last matched character
        last = max(start, end - 1)
        newline = content.find("\n", last)
        return len(content) if newline < 0 else newline + 1

    return content.rfind("\n", 0, start) + 1


def apply_snippet(content: str, snippet: CodeSnippet) -> str:
    """
    Splice a snippet into a file's content.

    Applying the same snippet twice leaves the content unchanged.

    Raises:
        AnchorNotFoundError: If the anchor does not match
    """
    body = snippet.content.rstrip("\n") + "\n"
    if body.strip() and body.strip("\n") in content:
        return content

    offset = find_insertion_offset(content, snippet)
    if offset == len(content) and content and not content.endswith("\n"):
        return content + "\n" + body
    return content[:offset] + body + content[offset:]
