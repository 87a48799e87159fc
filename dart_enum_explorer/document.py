"""Document-level helpers around the enum code generator.

These functions do what an editor integration does with a live document,
but on a plain-text snapshot: find the enum under a cursor line, look for
a previously generated block, and describe the insertion or replacement as
edit data. Nothing here mutates its input; :func:`apply_edits` returns a
new string.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .codegen.core.generator import EnumCodeGenerator
from .codegen.core.model import EnumModel, TextSpan
from .codegen.core.parser import (
    FailureKind,
    ParseFailure,
    ParseResult,
    find_closing_brace,
    is_failure,
    mask_comments_and_strings,
    parse,
    parse_all,
)
from .codegen.registry import OperationKind
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TextEdit:
    """Replace ``text[start:end]`` with ``new_text``. ``start == end`` inserts."""

    start: int
    end: int
    new_text: str

    @property
    def is_insert(self) -> bool:
        return self.start == self.end


@dataclass
class CodeAction:
    """A titled generation request expressed as edits against a document."""

    title: str
    kind: str
    operation: OperationKind
    container: str
    code: str
    edits: List[TextEdit] = field(default_factory=list)
    replaces_existing: bool = False


def extract_enum_source(text: str, line: int) -> Optional[Tuple[str, int]]:
    """Capture the lines of the enum declared on ``line``.

    Lines are collected from ``line`` until the braces opened so far are
    balanced again. The capture may be incomplete; the parser reports that as
    unbalanced braces.

    Args:
        text: Whole document.
        line: 0-based cursor line; it must mention ``enum``.

    Returns:
        Tuple of (captured text, offset of its first character), or None when
        the line is out of range or has no ``enum`` keyword.
    """
    lines = text.split("\n")
    if line < 0 or line >= len(lines) or "enum" not in lines[line]:
        return None

    masked_lines = mask_comments_and_strings(text).split("\n")
    start = sum(len(current) + 1 for current in lines[:line])

    depth = 0
    seen_brace = False
    last = line
    for index in range(line, len(lines)):
        masked = masked_lines[index]
        depth += masked.count("{") - masked.count("}")
        seen_brace = seen_brace or "{" in masked
        last = index
        if seen_brace and depth <= 0:
            break

    captured = "\n".join(lines[line : last + 1])
    return captured, start


def find_enum_at_line(
    text: str, line: int, allow_duplicates: bool = False
) -> ParseResult:
    """Parse the enum declared on ``line`` of a document.

    When the captured lines do not close the declaration, the capture is
    widened to the rest of the document and parsed once more.

    Returns:
        EnumModel with a span relative to ``text``, or a ParseFailure.
    """
    captured = extract_enum_source(text, line)
    if captured is None:
        return ParseFailure(
            FailureKind.NO_ENUM_KEYWORD, f"Line {line} does not declare an enum"
        )

    raw, offset = captured
    result = parse(raw, allow_duplicates=allow_duplicates)

    if is_failure(result) and result.kind == FailureKind.UNBALANCED_BRACES:
        logger.debug("Widening enum capture at line %d to the end of the document", line)
        result = parse(text[offset:], allow_duplicates=allow_duplicates)

    if is_failure(result):
        return result

    return replace(result, source_range=result.source_range.shifted(offset, text))


def find_block(text: str, name: str, start_offset: int = 0) -> Optional[TextSpan]:
    """Find an ``extension <name>`` or ``class <name>`` block.

    The span runs from the ``extension``/``class`` keyword to the closing
    brace. It is widened to the start of its first line and the end of its
    last line only where the text in between is whitespace, so code sharing
    those lines is never part of the span.

    Returns:
        Span of the block, or None when absent or never closed.
    """
    masked = mask_comments_and_strings(text)
    pattern = re.compile(rf"\b(?:extension|class)\s+{re.escape(name)}\b")
    match = pattern.search(masked, start_offset)
    if match is None:
        return None

    open_index = masked.find("{", match.end())
    if open_index == -1:
        return None

    close_index = find_closing_brace(masked, open_index)
    if close_index is None:
        return None

    start = match.start()
    line_start = text.rfind("\n", 0, start) + 1
    if not text[line_start:start].strip():
        start = line_start

    end = close_index + 1
    line_end = text.find("\n", end)
    line_end = len(text) if line_end == -1 else line_end
    if not text[end:line_end].strip():
        end = line_end

    return TextSpan.from_offsets(text, start, end)


def build_code_action(
    text: str,
    model: EnumModel,
    kind: Union[OperationKind, str],
    generator: Optional[EnumCodeGenerator] = None,
) -> CodeAction:
    """Describe generating one operation for ``model`` inside ``text``.

    An existing block with the same container name after the enum is
    replaced in place; otherwise the block is inserted on the line after the
    enum's closing brace, separated by a blank line.
    """
    generator = generator or EnumCodeGenerator()
    spec = generator.registry.get_spec(kind)
    code = generator.generate_block(model, spec.kind)
    container = generator.container_name(model, spec.kind)
    trailing = "\n" if generator.config.add_trailing_newline else ""

    anchor = model.source_range.end if model.source_range else len(text)
    existing = find_block(text, container, anchor)

    if existing is not None:
        edits = [TextEdit(existing.start, existing.end, code)]
    else:
        newline = text.find("\n", anchor)
        if newline == -1:
            edits = [TextEdit(len(text), len(text), "\n\n" + code + trailing)]
        else:
            position = newline + 1
            # The closing brace must not run into the text that follows
            if position < len(text):
                trailing = "\n"
            edits = [TextEdit(position, position, "\n" + code + trailing)]

    return CodeAction(
        title=spec.action_title(existing is not None),
        kind=spec.action_kind,
        operation=spec.kind,
        container=container,
        code=code,
        edits=edits,
        replaces_existing=existing is not None,
    )


def provide_code_actions(
    text: str, line: int, generator: Optional[EnumCodeGenerator] = None
) -> List[CodeAction]:
    """All code actions for the enum declared on ``line``.

    Returns an empty list when the line holds no parsable enum.
    """
    generator = generator or EnumCodeGenerator()
    result = find_enum_at_line(
        text, line, allow_duplicates=generator.config.allow_duplicate_values
    )
    if is_failure(result):
        logger.debug("No code actions at line %d: %s", line, result)
        return []

    return [
        build_code_action(text, result, kind, generator)
        for kind in generator.registry.list_operations()
    ]


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to ``text`` and return the new text.

    Raises:
        ValueError: If edits overlap or fall outside the text.
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))

    previous_end = 0
    for edit in ordered:
        if edit.start < previous_end or edit.end < edit.start or edit.end > len(text):
            raise ValueError(f"Invalid or overlapping edit at {edit.start}-{edit.end}")
        previous_end = edit.end

    for edit in reversed(ordered):
        text = text[: edit.start] + edit.new_text + text[edit.end :]
    return text


def apply_operations(
    text: str,
    operations: Sequence[Union[OperationKind, str]],
    generator: Optional[EnumCodeGenerator] = None,
    enum_names: Optional[Sequence[str]] = None,
) -> str:
    """Generate ``operations`` for every enum (or the named ones) in a document.

    Each action is computed against the text produced by the previous one,
    so running the same request twice leaves the document unchanged.
    """
    generator = generator or EnumCodeGenerator()
    allow_duplicates = generator.config.allow_duplicate_values

    names = [model.name for model in parse_all(text, allow_duplicates)]
    if enum_names is not None:
        names = [name for name in names if name in enum_names]

    for name in names:
        for operation in operations:
            model = next(
                (m for m in parse_all(text, allow_duplicates) if m.name == name), None
            )
            if model is None:
                break
            action = build_code_action(text, model, operation, generator)
            logger.info("%s for %s", action.title, name)
            text = apply_edits(text, action.edits)

    return text
