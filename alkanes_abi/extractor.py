import logging

import tree_sitter_rust
from tree_sitter import Language, Parser

from .config import ENTRY_METHOD, TRAIT_NAME
from .core import first_syntax_error, get_text, last_segment, parse_opcode
from .errors import LiteralRangeError, SourceSyntaxError, UnresolvedTypeError
from .models import AbiMethod, AlkanesABI

logger = logging.getLogger(__name__)

COMMENT_TYPES = {"line_comment", "block_comment"}

_RUST_LANGUAGE = None


def get_ts_language():
    """Return the tree-sitter ``Language`` object for Rust."""
    global _RUST_LANGUAGE
    if _RUST_LANGUAGE is None:
        _RUST_LANGUAGE = Language(tree_sitter_rust.language())
    return _RUST_LANGUAGE


def make_parser() -> Parser:
    ts_parser = Parser()
    ts_parser.language = get_ts_language()
    return ts_parser


def _named(node):
    return [child for child in node.named_children if child.type not in COMMENT_TYPES]


# ── ABI extraction ───────────────────────────────────────────────────


class RustAbiExtractor:
    """Walk a Rust module and collect the opcodes its responder dispatches on.

    Only top-level ``impl <trait_name> for T`` blocks are considered. Inside
    each, every method named ``entry_method`` is scanned for a ``match`` used
    as a statement directly in its body, and each arm whose pattern is a
    single integer literal becomes one ``AbiMethod``.
    """

    def __init__(self, ts_parser, code_bytes, trait_name=TRAIT_NAME, entry_method=ENTRY_METHOD):
        self.ts_parser = ts_parser
        self.code_bytes = code_bytes
        self.trait_name = trait_name
        self.entry_method = entry_method
        self.abi = AlkanesABI()

    def extract(self) -> AlkanesABI:
        tree = self.ts_parser.parse(self.code_bytes)
        self._check_syntax(tree.root_node)
        for item in tree.root_node.named_children:
            if item.type == "impl_item" and self._implements_responder(item):
                self._visit_impl(item)
        return self.abi

    def _check_syntax(self, root):
        error = first_syntax_error(root)
        if error is None:
            return
        row, column = error.start_point
        if error.is_missing:
            message = f"Syntax error at line {row + 1}, column {column + 1}: missing '{error.type}'"
        else:
            message = f"Syntax error at line {row + 1}, column {column + 1}"
        raise SourceSyntaxError(message, line=row + 1, column=column + 1)

    def _implements_responder(self, item) -> bool:
        trait = item.child_by_field_name("trait")
        if trait is None:
            return False
        return last_segment(trait, self.code_bytes) == self.trait_name

    def _visit_impl(self, item):
        self.abi.name = self._contract_name(item)
        logger.debug("Found %s impl for %s", self.trait_name, self.abi.name)

        body = item.child_by_field_name("body")
        if body is None:
            return
        for member in _named(body):
            if member.type != "function_item":
                continue
            name = member.child_by_field_name("name")
            if name is not None and get_text(name, self.code_bytes) == self.entry_method:
                self._visit_entry_method(member)

    def _contract_name(self, item) -> str:
        self_type = item.child_by_field_name("type")
        name = last_segment(self_type, self.code_bytes) if self_type is not None else None
        if name is None:
            row = item.start_point[0] + 1
            text = get_text(self_type, self.code_bytes) if self_type is not None else "<none>"
            raise UnresolvedTypeError(
                f"Cannot resolve contract name from implementing type '{text}' at line {row}"
            )
        return name

    def _visit_entry_method(self, method):
        block = method.child_by_field_name("body")
        if block is None:
            return
        for stmt in _named(block):
            match_expr = self._statement_match(stmt)
            if match_expr is not None:
                logger.debug("Dispatch match at line %d", match_expr.start_point[0] + 1)
                self._visit_match(match_expr)

    def _statement_match(self, stmt):
        if stmt.type == "match_expression":
            return stmt
        if stmt.type == "expression_statement":
            inner = _named(stmt)
            if len(inner) == 1 and inner[0].type == "match_expression":
                return inner[0]
        return None

    def _visit_match(self, match_expr):
        body = match_expr.child_by_field_name("body")
        if body is None:
            return
        for arm in _named(body):
            if arm.type != "match_arm":
                continue
            opcode = self._arm_opcode(arm)
            if opcode is None:
                logger.debug("Skipping non-literal arm at line %d", arm.start_point[0] + 1)
                continue
            self.abi.methods.append(AbiMethod.for_opcode(opcode))

    def _arm_opcode(self, arm) -> int | None:
        pattern = arm.child_by_field_name("pattern")
        if pattern is None or pattern.child_by_field_name("condition") is not None:
            return None

        parts = _named(pattern) if pattern.type == "match_pattern" else [pattern]
        if len(parts) != 1:
            return None

        lit = parts[0]
        if lit.type == "integer_literal":
            return parse_opcode(get_text(lit, self.code_bytes))
        if lit.type == "negative_literal":
            if any(child.type == "integer_literal" for child in lit.named_children):
                raise LiteralRangeError(get_text(lit, self.code_bytes))
        return None


def extract_abi(source, trait_name=TRAIT_NAME, entry_method=ENTRY_METHOD) -> AlkanesABI:
    """Extract the ABI description from Rust source text or bytes."""
    code_bytes = source.encode("utf-8") if isinstance(source, str) else source
    extractor = RustAbiExtractor(make_parser(), code_bytes, trait_name, entry_method)
    return extractor.extract()
