import re

from .errors import LiteralRangeError

U64_MAX = 2**64 - 1

_INT_SUFFIX = re.compile(r"[iu](?:8|16|32|64|128|size)$")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def get_text(node, code_bytes: bytes) -> str:
    """Extract source text for a tree-sitter node."""
    return code_bytes[node.start_byte : node.end_byte].decode("utf-8")


def last_segment(node, code_bytes: bytes) -> str | None:
    """Return the final identifier of a path-like type node.

    ``Foo``, ``runtime::Foo`` and ``Foo<T>`` all resolve to ``Foo``. Any other
    shape (references, tuples, arrays, trait objects...) resolves to ``None``.
    """
    if node.type in ("type_identifier", "primitive_type", "identifier"):
        return get_text(node, code_bytes)
    elif node.type in ("scoped_type_identifier", "scoped_identifier"):
        name = node.child_by_field_name("name")
        return last_segment(name, code_bytes) if name else None
    elif node.type == "generic_type":
        inner = node.child_by_field_name("type")
        return last_segment(inner, code_bytes) if inner else None
    return None


def first_syntax_error(node):
    """Return the first ERROR or missing node in document order, if any."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = first_syntax_error(child)
        if found is not None:
            return found
    return None


def parse_opcode(literal: str) -> int:
    """Parse a Rust integer literal as an unsigned 64-bit opcode.

    Separators, radix prefixes and type suffixes are accepted the way rustc
    accepts them; the suffix does not narrow the accepted range.
    """
    digits = _INT_SUFFIX.sub("", literal.strip().replace("_", ""))
    base = _RADIX_PREFIXES.get(digits[:2], 10)
    if base != 10:
        digits = digits[2:]

    if not digits or not digits.isalnum():
        raise LiteralRangeError(literal)
    try:
        value = int(digits, base)
    except ValueError:
        raise LiteralRangeError(literal) from None

    if value > U64_MAX:
        raise LiteralRangeError(literal)
    return value
