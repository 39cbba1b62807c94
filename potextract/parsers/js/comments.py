"""Locate the comments that belong to a call expression.

A call "governs" a span of source: for `return t('x');` that is the whole
statement, for an argument on its own line it is the argument up to the
following comma. Leading comments are read from the trivia before the span,
trailing comments from the rest of the line after it.

All offsets are byte offsets into the UTF-8 source, as tree-sitter reports them.
"""

import re
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node

from potextract.models.options import CommentOptions
from potextract.parsers.js.utils import named_children

_LINE_COMMENT_RE = re.compile(r"//\s*(.*?)\s*")
_BLOCK_COMMENT_RE = re.compile(r"/\*\s*(.*?)\s*\*/", re.DOTALL)

_HORIZONTAL_SPACE = frozenset(b" \t\v\f")
_LINE_BREAKS = frozenset(b"\r\n")

# Parents whose span replaces the node's own span
_ENCLOSING_KINDS = frozenset({
    "return_statement",
    "throw_statement",
    "expression_statement",
    "parenthesized_expression",
    "export_statement",
})

_DECLARATION_KINDS = frozenset({"lexical_declaration", "variable_declaration"})


class CommentKind(Enum):
    LINE = "line"
    BLOCK = "block"


@dataclass
class CommentRange:
    """A comment found in trivia, with `end` exclusive."""

    start: int
    end: int
    kind: CommentKind
    has_trailing_new_line: bool


def scan_comment_ranges(source: bytes, pos: int, trailing: bool) -> list[CommentRange]:
    """Collect the comments in the trivia starting at `pos`.

    Leading scans only collect comments after the first line break (anything
    before it trails the previous token), except at the start of the file.
    Trailing scans stop at the first line break.
    """
    ranges: list[CommentRange] = []
    pending: CommentRange | None = None
    collecting = trailing

    if pos == 0:
        collecting = True
        if source.startswith(b"#!"):
            end_of_line = re.search(rb"[\r\n]", source)
            pos = end_of_line.start() if end_of_line else len(source)

    length = len(source)
    while 0 <= pos < length:
        ch = source[pos]

        if ch in _LINE_BREAKS:
            if ch == 0x0D and source[pos + 1:pos + 2] == b"\n":
                pos += 1
            pos += 1
            if trailing:
                break
            collecting = True
            if pending is not None:
                pending.has_trailing_new_line = True
            continue

        if ch in _HORIZONTAL_SPACE:
            pos += 1
            continue

        if ch == 0x2F and source[pos + 1:pos + 2] in (b"/", b"*"):
            start = pos
            has_trailing_new_line = False
            if source[pos + 1] == 0x2F:
                kind = CommentKind.LINE
                pos += 2
                while pos < length:
                    if source[pos] in _LINE_BREAKS:
                        has_trailing_new_line = True
                        break
                    pos += 1
            else:
                kind = CommentKind.BLOCK
                close = source.find(b"*/", pos + 2)
                pos = length if close == -1 else close + 2

            if collecting:
                if pending is not None:
                    ranges.append(pending)
                pending = CommentRange(start, pos, kind, has_trailing_new_line)
            continue

        break

    if pending is not None:
        ranges.append(pending)
    return ranges


def _last_token_end(node: Node) -> int:
    """End of the last non-comment token inside `node`."""
    while node.child_count:
        tokens = [child for child in node.children if child.type != "comment"]
        if not tokens:
            break
        node = tokens[-1]
    return node.end_byte


def full_start(node: Node) -> int:
    """Start of the trivia before `node`: the end of the previous token, or 0."""
    current = node
    while current is not None:
        sibling = current.prev_sibling
        while sibling is not None and sibling.type == "comment":
            sibling = sibling.prev_sibling
        if sibling is not None:
            return _last_token_end(sibling)
        current = current.parent
    return 0


def _index_of(node: Node, nodes: list[Node]) -> int:
    for index, candidate in enumerate(nodes):
        if candidate.start_byte == node.start_byte and candidate.end_byte == node.end_byte:
            return index
    return -1


def node_is_on_separate_line(node: Node, nodes: list[Node]) -> bool:
    """True if no sibling in `nodes` shares a line with `node`."""
    index = _index_of(node, nodes)
    if index == -1:
        return False

    line = node.start_point[0]
    if index > 0 and nodes[index - 1].end_point[0] == line:
        return False
    if index + 1 < len(nodes) and nodes[index + 1].start_point[0] == line:
        return False
    return True


def get_extraction_span(node: Node, source: bytes) -> tuple[int, int]:
    """Return the (start, end) byte span whose surrounding comments belong to `node`."""
    start = full_start(node)
    end = node.end_byte
    parent = node.parent

    def skip_to(character: bytes) -> None:
        nonlocal end
        target = character[0]
        while end < len(source):
            ch = source[end]
            if ch == target:
                end += 1
                return
            if ch in _HORIZONTAL_SPACE:
                end += 1
                continue
            return

    if parent is None:
        return start, end

    if parent.type in _ENCLOSING_KINDS:
        return get_extraction_span(parent, source)

    if parent.type == "variable_declarator":
        declaration = parent.parent
        value = parent.child_by_field_name("value")
        if (
            declaration is not None
            and declaration.type in _DECLARATION_KINDS
            and value is not None
            and _index_of(node, [value]) == 0
        ):
            declarators = [
                child for child in declaration.named_children if child.type == "variable_declarator"
            ]
            if len(declarators) == 1:
                return get_extraction_span(declaration, source)

            anchors = []
            for declarator in declarators:
                anchor = declarator.child_by_field_name("value")
                if anchor is None:
                    anchor = declarator.child_by_field_name("name")
                anchors.append(anchor)
            if node_is_on_separate_line(node, anchors):
                last_value = declarators[-1].child_by_field_name("value")
                if last_value is not None and _index_of(node, [last_value]) == 0:
                    skip_to(b";")
                else:
                    skip_to(b",")

    elif parent.type == "arguments":
        call = parent.parent
        if call is not None and call.type in ("call_expression", "new_expression"):
            if node_is_on_separate_line(node, named_children(parent)):
                skip_to(b",")

    elif parent.type == "pair":
        obj = parent.parent
        if obj is not None and obj.type == "object":
            if node_is_on_separate_line(parent, named_children(obj)):
                skip_to(b",")

    elif parent.type == "array":
        if node_is_on_separate_line(node, named_children(parent)):
            skip_to(b",")

    elif parent.type == "ternary_expression":
        alternative = parent.child_by_field_name("alternative")
        if alternative is not None and _index_of(node, [alternative]) == 0:
            skip_to(b";")

    return start, end


def _extract_line_comment(text: str) -> str | None:
    match = _LINE_COMMENT_RE.fullmatch(text)
    return match.group(1) if match else None


def _extract_block_comment(text: str) -> str | None:
    if "\n" in text:
        return None
    match = _BLOCK_COMMENT_RE.fullmatch(text)
    return match.group(1) if match else None


def _resolve_comment_options(options: CommentOptions | None) -> tuple[bool, bool, bool]:
    """Return (other_line_leading, same_line_leading, same_line_trailing)."""
    if options is None:
        options = CommentOptions()
    flags = (options.other_line_leading, options.same_line_leading, options.same_line_trailing)
    if all(flag is None for flag in flags):
        return False, True, True
    return tuple(bool(flag) for flag in flags)  # type: ignore[return-value]


def _comments_at(
    source: bytes,
    position: int,
    trailing: bool,
    options: CommentOptions,
    other_line_leading: bool,
    same_line_leading: bool,
) -> list[str]:
    comments: list[str] = []

    for comment_range in scan_comment_ranges(source, position, trailing):
        is_same_line = not comment_range.has_trailing_new_line
        if not trailing and not (
            (is_same_line and same_line_leading) or (not is_same_line and other_line_leading)
        ):
            continue

        text = source[comment_range.start:comment_range.end].decode("utf-8", "replace")
        if comment_range.kind is CommentKind.LINE:
            comment = _extract_line_comment(text)
        else:
            comment = _extract_block_comment(text)

        if not comment:
            continue

        if options.regex is not None:
            match = options.regex.search(comment)
            if match is None:
                continue
            if match.re.groups and match.group(1) is not None:
                comments.append(match.group(1))
            else:
                comments.append(match.group(0))
        else:
            comments.append(comment)

    return comments


def extract_comments(call: Node, source: bytes, options: CommentOptions | None = None) -> list[str]:
    """Return the comments attached to a call expression.

    Args:
        call: The call expression node.
        source: Source bytes of the tree `call` belongs to.
        options: Which comment positions to collect, plus an optional filter.

    Returns:
        Comment texts, leading comments first.
    """
    other_line_leading, same_line_leading, same_line_trailing = _resolve_comment_options(options)
    options = options or CommentOptions()

    start, end = get_extraction_span(call, source)

    # Inside JSX braces the call reads as if it started on its own line
    if call.parent is not None and call.parent.type == "jsx_expression":
        source = source[:start] + b"\n" + source[start:]
        end += 1

    comments: list[str] = []
    if other_line_leading or same_line_leading:
        comments.extend(
            _comments_at(source, start, False, options, other_line_leading, same_line_leading)
        )
    if same_line_trailing:
        comments.extend(
            _comments_at(source, end, True, options, other_line_leading, same_line_leading)
        )
    return comments
