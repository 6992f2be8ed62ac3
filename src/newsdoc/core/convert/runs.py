"""Tree walking: flatten a markup subtree into formatted text runs"""

from newsdoc.core.models import MAX_DEPTH, PLAIN, FormattingState, MarkupNode, Run, Text
from newsdoc.errors import ContentTooComplex


def extract_runs(
    node: MarkupNode,
    inherited: FormattingState = PLAIN,
    max_depth: int = MAX_DEPTH,
    depth: int = 0,
    ) -> list[Run]:
    """Return the runs of `node` in source order, each carrying its accumulated formatting.

    Formatting only accumulates downward: an element extends `inherited` with the
    flag its tag implies and passes the new state to its children, so sibling
    subtrees never see each other's flags. Whitespace is kept exactly as authored.
    Raises ContentTooComplex when nesting exceeds max_depth.
    """
    if isinstance(node, Text):
        return [Run(node.text, inherited)] if node.text else []
    if depth > max_depth:
        raise ContentTooComplex(depth, max_depth)

    effective = inherited.with_tag(node.tag)
    runs: list[Run] = []
    for child in node.children:
        runs.extend(extract_runs(child, effective, max_depth, depth + 1))
    return runs


def plain_text(node: MarkupNode, max_depth: int = MAX_DEPTH, depth: int = 0) -> str:
    """Concatenate all text under `node` in document order, tags stripped."""
    if isinstance(node, Text):
        return node.text
    if depth > max_depth:
        raise ContentTooComplex(depth, max_depth)
    return "".join(plain_text(child, max_depth, depth + 1) for child in node.children)
