"""Helpers for reading JavaScript / TypeScript syntax trees."""

import re

from tree_sitter import Node

# Callee path segment matching an optional leading `this`
OPTIONAL_THIS = "[this]"

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_ESCAPE_RE = re.compile(
    r"\\(?:"
    r"u\{(?P<code_point>[0-9a-fA-F]+)\}"
    r"|u(?P<unicode>[0-9a-fA-F]{4})"
    r"|x(?P<hex>[0-9a-fA-F]{2})"
    r"|(?P<octal>[0-3][0-7]{0,2}|[4-7][0-7]?)"
    r"|(?P<line_continuation>\r\n|[\r\n\u2028\u2029])"
    r"|(?P<char>.)"
    r")",
    re.DOTALL,
)


def _replace_escape(match: re.Match[str]) -> str:
    if match.group("code_point") is not None:
        return chr(int(match.group("code_point"), 16))
    if match.group("unicode") is not None:
        return chr(int(match.group("unicode"), 16))
    if match.group("hex") is not None:
        return chr(int(match.group("hex"), 16))
    if match.group("octal") is not None:
        return chr(int(match.group("octal"), 8))
    if match.group("line_continuation") is not None:
        return ""
    char = match.group("char")
    return _SIMPLE_ESCAPES.get(char, char)


def decode_js_escapes(raw: str) -> str:
    """Return the runtime value of the raw text between a literal's quotes."""
    value = _ESCAPE_RE.sub(_replace_escape, raw)
    # A surrogate pair written as two \u escapes decodes to two lone surrogates
    if any("\ud800" <= c <= "\udfff" for c in value):
        value = value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return value


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def named_children(node: Node) -> list[Node]:
    """Named children of `node` without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def get_call_arguments(call: Node) -> list[Node]:
    """Argument nodes of a call or new expression ([] for tagged templates)."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return []
    return named_children(arguments)


def get_literal_value(node: Node | None) -> str | None:
    """Value of a string literal or substitution-free template literal.

    Returns:
        The decoded string, or None if `node` is any other kind of node.
    """
    if node is None:
        return None

    if node.type == "string":
        return decode_js_escapes(node_text(node)[1:-1])

    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        raw = node_text(node)[1:-1].replace("\r\n", "\n").replace("\r", "\n")
        return decode_js_escapes(raw)

    return None


def _get_addition(node: Node) -> Node | None:
    while node.type == "parenthesized_expression":
        inner = named_children(node)
        if len(inner) != 1:
            return None
        node = inner[0]

    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type == "+":
            return node
    return None


def _fold_addition(addition: Node) -> str | None:
    parts = []
    for operand in (addition.child_by_field_name("left"), addition.child_by_field_name("right")):
        if operand is None:
            return None
        value = get_literal_value(operand)
        if value is None:
            inner = _get_addition(operand)
            if inner is None:
                return None
            value = _fold_addition(inner)
            if value is None:
                return None
        parts.append(value)
    return "".join(parts)


def get_string_value(node: Node | None) -> str | None:
    """Value of a literal or of a `+` chain made only of literals.

    A chain with any non-literal operand is not folded at all.
    """
    if node is None:
        return None
    addition = _get_addition(node)
    if addition is None:
        return get_literal_value(node)
    return _fold_addition(addition)


def segments_match_member_expression(segments: list[str], member: Node) -> bool:
    """Check the dotted path `segments` against a member expression chain."""
    segments = list(segments)

    prop = member.child_by_field_name("property")
    if prop is None or not segments or segments.pop() != node_text(prop):
        return False

    obj = member.child_by_field_name("object")
    if obj is None:
        return False

    if obj.type == "identifier":
        segment = segments.pop() if segments else None
        return (
            len(segments) == 0 or (len(segments) == 1 and segments[0] == OPTIONAL_THIS)
        ) and segment == node_text(obj)

    if obj.type == "this":
        segment = segments.pop() if segments else None
        return len(segments) == 0 and segment in ("this", OPTIONAL_THIS)

    if obj.type == "member_expression":
        return segments_match_member_expression(segments, obj)

    return False


def callee_name_matches(callee_name: str, call: Node) -> bool:
    """Check whether the callee of `call` matches a dotted name like ``this.i18n.t``."""
    callee = call.child_by_field_name("function")
    if callee is None:
        return False

    segments = callee_name.split(".")
    if len(segments) == 1:
        return callee.type == "identifier" and node_text(callee) == segments[0]

    return callee.type == "member_expression" and segments_match_member_expression(segments, callee)
