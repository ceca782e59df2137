"""
Helpers shared by VCS clients.
"""

import math

AUTOMERGE_COMMIT_MSG = "[vcsbridge] Automatically merging after successful apply"


def split_comment(comment: str, max_size: int, sep_end: str, sep_start: str) -> list[str]:
    """Split a comment into fragments no longer than max_size.

    Every fragment except the last ends with sep_end, and every fragment
    except the first starts with sep_start. A comment that already fits is
    returned as-is, undecorated.
    """
    if len(comment) <= max_size:
        return [comment]

    chunk = max_size - len(sep_end) - len(sep_start)
    if chunk <= 0:
        raise ValueError(
            f"max_size {max_size} leaves no room for content between separators"
        )

    count = math.ceil(len(comment) / chunk)
    fragments: list[str] = []
    for i in range(count):
        portion = comment[i * chunk : (i + 1) * chunk]
        if i < count - 1:
            portion += sep_end
        if i > 0:
            portion = sep_start + portion
        fragments.append(portion)
    return fragments


def strip_separators(fragments: list[str], sep_end: str, sep_start: str) -> str:
    """Rejoin fragments produced by split_comment into the original text."""
    if len(fragments) <= 1:
        return "".join(fragments)

    parts: list[str] = []
    last = len(fragments) - 1
    for i, fragment in enumerate(fragments):
        if i > 0:
            fragment = fragment.removeprefix(sep_start)
        if i < last:
            fragment = fragment.removesuffix(sep_end)
        parts.append(fragment)
    return "".join(parts)
