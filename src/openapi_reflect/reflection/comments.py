# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Documentation lookup for types and fields.

Comments are read from module source: a class docstring documents the type,
and a field is documented by the string literal directly after its
annotated assignment, the ``#`` comment block directly above it, or a
trailing ``#`` comment on the same line, in that order of preference.

Each module is parsed at most once per :class:`CommentStore`.
"""

from __future__ import annotations

import ast
import importlib
import inspect
import io
import logging
import re
import tokenize
from collections.abc import Callable

from openapi_reflect.errors import CommentLookupError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEPRECATED_MARKER = "Deprecated:"

CommentLoader = Callable[[str], dict[str, str]]


class CommentStore:
    """Per-package cache of documentation comments.

    Args:
        loader: Callable mapping a module name to its ``{"Type": text,
            "Type.field": text}`` comments. Defaults to
            :func:`load_module_comments`.
    """

    def __init__(self, loader: CommentLoader | None = None) -> None:
        self._loader = loader or load_module_comments
        self._packages: dict[str, dict[str, str]] = {}

    def get(self, package_path: str) -> dict[str, str]:
        """Return the comments of *package_path*, loading them on first access.

        Raises:
            CommentLookupError: If the package cannot be introspected.
        """
        if package_path in self._packages:
            return self._packages[package_path]
        comments = self._loader(package_path)
        logger.debug("Loaded %d comment(s) for package %r", len(comments), package_path)
        self._packages[package_path] = comments
        return comments

    def lookup(self, package_path: str, type_name: str, field_name: str | None = None) -> tuple[str, bool]:
        """Return the comment text of a type or field and whether it marks a deprecation.

        A missing comment yields ``("", False)``. Types without a package
        (anonymous or builtin types) have no source and are never looked up.
        """
        if not package_path:
            return "", False
        comments = self.get(package_path)
        identity = _GENERIC_SUFFIX.sub("", type_name)
        if field_name is not None:
            identity = f"{identity}.{field_name}"
        text = comments.get(identity, "")
        return text, is_deprecated(text)

    def clear(self) -> None:
        """Drop every cached package."""
        self._packages.clear()


def is_deprecated(comment: str) -> bool:
    """Return True if any line of *comment* begins with ``Deprecated:``."""
    return any(line.strip().startswith(DEPRECATED_MARKER) for line in comment.splitlines())


def load_module_comments(module_name: str) -> dict[str, str]:
    """Collect class and field documentation from the source of *module_name*.

    Raises:
        CommentLookupError: If the module cannot be imported, has no
            retrievable source, or its source cannot be parsed.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise CommentLookupError(f"cannot import package {module_name!r}: {exc}") from exc
    try:
        source = inspect.getsource(module)
    except (OSError, TypeError) as exc:
        raise CommentLookupError(f"cannot read source of package {module_name!r}: {exc}") from exc
    try:
        return parse_comments(source)
    except (SyntaxError, tokenize.TokenError) as exc:
        raise CommentLookupError(f"cannot parse source of package {module_name!r}: {exc}") from exc


def parse_comments(source: str) -> dict[str, str]:
    """Extract ``{"Type": doc, "Type.field": doc}`` from Python *source*."""
    tree = ast.parse(source)
    line_comments, standalone = _scan_comments(source)
    comments: dict[str, str] = {}

    def _visit_class(node: ast.ClassDef, prefix: str) -> None:
        qualname = f"{prefix}{node.name}"
        docstring = ast.get_docstring(node)
        if docstring:
            comments[qualname] = docstring
        body = node.body
        for index, stmt in enumerate(body):
            if isinstance(stmt, ast.ClassDef):
                _visit_class(stmt, qualname + ".")
                continue
            if not (isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name)):
                continue
            text = _attribute_docstring(body, index)
            if not text:
                text = _comment_block_above(stmt.lineno, line_comments, standalone)
            if not text and stmt.end_lineno in line_comments and stmt.end_lineno not in standalone:
                text = line_comments[stmt.end_lineno]
            if text:
                comments[f"{qualname}.{stmt.target.id}"] = text

    for node in tree.body:
        if isinstance(node, ast.ClassDef):
            _visit_class(node, "")
    return comments


# ################
# Implementation
# ################

# Body[T] is documented as Body.
_GENERIC_SUFFIX = re.compile(r"\[[^\]]*\]")


def _scan_comments(source: str) -> tuple[dict[int, str], set[int]]:
    """Map line numbers to comment text, and collect lines holding only a comment."""
    line_comments: dict[int, str] = {}
    code_lines: set[int] = set()
    ignored = {tokenize.COMMENT, tokenize.NL, tokenize.NEWLINE, tokenize.INDENT, tokenize.DEDENT}
    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type == tokenize.COMMENT:
            line_comments[token.start[0]] = token.string.lstrip("#").removeprefix(":").strip()
        elif token.type not in ignored:
            code_lines.update(range(token.start[0], token.end[0] + 1))
    standalone = {line for line in line_comments if line not in code_lines}
    return line_comments, standalone


def _attribute_docstring(body: list[ast.stmt], index: int) -> str:
    if index + 1 >= len(body):
        return ""
    following = body[index + 1]
    if (
        isinstance(following, ast.Expr)
        and isinstance(following.value, ast.Constant)
        and isinstance(following.value.value, str)
    ):
        return inspect.cleandoc(following.value.value)
    return ""


def _comment_block_above(lineno: int, line_comments: dict[int, str], standalone: set[int]) -> str:
    lines: list[str] = []
    current = lineno - 1
    while current in standalone:
        lines.append(line_comments[current])
        current -= 1
    return "\n".join(reversed(lines))
