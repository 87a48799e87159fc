"""
Dart enum declaration parser.

Turns a raw text fragment into an EnumModel. The parser never raises for bad
input: every problem is reported as a ParseFailure so callers can probe text
speculatively and simply offer nothing when parsing fails.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from ...logging_config import get_logger
from .model import EnumModel, TextSpan, VALUE_NAME_PATTERN

logger = get_logger(__name__)

# `enum Name`; the header then runs (type parameters, mixins, interfaces)
# up to the opening `{`
ENUM_KEYWORD_PATTERN = re.compile(r"\benum\s+([A-Z][A-Za-z0-9_]*)\b")
# First character that ends a header, or the next `enum` mention
HEADER_STOP_PATTERN = re.compile(r"[{};()=]|\benum\b")

ANNOTATION_PATTERN = re.compile(r"@[A-Za-z_][\w.]*")

OPENERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
CLOSERS = {v: k for k, v in OPENERS.items()}


class FailureKind(Enum):
    """Reasons a parse can fail."""

    NO_ENUM_KEYWORD = "NoEnumKeyword"
    UNBALANCED_BRACES = "UnbalancedBraces"
    NO_VALUES = "NoValues"
    INVALID_VALUE = "InvalidValue"
    DUPLICATE_VALUES = "DuplicateValues"


@dataclass(frozen=True)
class ParseFailure:
    """A failed parse with a human-readable reason."""

    kind: FailureKind
    reason: str
    offset: Optional[int] = None

    @property
    def success(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.reason}"


ParseResult = Union[EnumModel, ParseFailure]


def is_failure(result: ParseResult) -> bool:
    """Check whether a parse result is a failure."""
    return isinstance(result, ParseFailure)


def mask_comments_and_strings(text: str) -> str:
    """
    Blank out comments and string literals, keeping every offset in place.

    Comment and literal characters are replaced by spaces (newlines are kept)
    so braces, parentheses, commas and semicolons inside them never reach the
    structural scan. Dart block comments nest.
    """
    out = list(text)
    length = len(text)
    i = 0

    def blank(start: int, end: int):
        for j in range(start, min(end, length)):
            if out[j] != "\n":
                out[j] = " "

    while i < length:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if ch == "/" and nxt == "/":
            end = text.find("\n", i)
            end = length if end == -1 else end
            blank(i, end)
            i = end
        elif ch == "/" and nxt == "*":
            depth = 0
            j = i
            while j < length:
                if text.startswith("/*", j):
                    depth += 1
                    j += 2
                elif text.startswith("*/", j):
                    depth -= 1
                    j += 2
                    if depth == 0:
                        break
                else:
                    j += 1
            blank(i, j)
            i = j
        elif ch in ("'", '"'):
            raw = i > 0 and text[i - 1] in "rR" and (i < 2 or not text[i - 2].isalnum())
            end = _find_string_end(text, i, raw)
            blank(i, end)
            i = end
        else:
            i += 1

    return "".join(out)


def _find_string_end(text: str, start: int, raw: bool) -> int:
    """Return the offset just past the string literal opening at ``start``."""
    quote = text[start]
    triple = text.startswith(quote * 3, start)
    delimiter = quote * 3 if triple else quote
    i = start + len(delimiter)
    length = len(text)

    while i < length:
        ch = text[i]
        if ch == "\\" and not raw:
            i += 2
            continue
        if not triple and ch == "\n":
            return i
        if text.startswith(delimiter, i):
            return i + len(delimiter)
        i += 1

    return length


def find_closing_brace(masked: str, open_index: int) -> Optional[int]:
    """Scan from an opening ``{`` to the brace that brings the depth back to 0."""
    depth = 0
    for i in range(open_index, len(masked)):
        ch = masked[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def _value_section(body: str) -> str:
    """
    Keep only the top-level text of the value list.

    Stops at the first top-level ``;`` and drops everything nested inside
    parentheses, brackets, braces or type arguments.
    """
    kept = []
    stack: List[str] = []

    for ch in body:
        if ch == ";" and not stack:
            break
        if ch in OPENERS:
            # `<` only opens type arguments outside of argument lists
            if ch == "<" and stack and stack[-1] != "<":
                continue
            stack.append(ch)
            continue
        if ch in CLOSERS:
            if stack and stack[-1] == CLOSERS[ch]:
                stack.pop()
            continue
        if not stack:
            kept.append(ch)

    return "".join(kept)


def extract_values(body: str) -> List[str]:
    """
    Split an enum body into bare value tokens.

    Constructor arguments, type arguments, annotations and named constructor
    suffixes (``value.named(...)``) are removed; empty tokens from trailing
    commas are dropped. Tokens are returned as written, unvalidated.
    """
    section = ANNOTATION_PATTERN.sub(" ", _value_section(body))
    tokens = []
    for token in section.split(","):
        token = token.split(".")[0].strip()
        if token:
            tokens.append(token)
    return tokens


@dataclass(frozen=True)
class EnumHeader:
    """Location of an ``enum Name ... {`` header in masked text."""

    name: str
    start: int
    open_index: int


def find_enum_header(masked: str, position: int = 0) -> Optional[EnumHeader]:
    """
    Find the first complete enum header at or after ``position``.

    Each ``enum Name`` mention is followed only up to the next character
    that can end a header or the next ``enum`` keyword, so a document with
    many headerless mentions is still scanned in linear time.
    """
    for keyword in ENUM_KEYWORD_PATTERN.finditer(masked, position):
        stop = HEADER_STOP_PATTERN.search(masked, keyword.end())
        if stop is None:
            return None
        if stop.group() == "{":
            return EnumHeader(keyword.group(1), keyword.start(), stop.start())
    return None


def _parse_header(
    raw: str, masked: str, header: EnumHeader, allow_duplicates: bool
) -> ParseResult:
    """Parse the declaration introduced by ``header``."""
    name = header.name

    close_index = find_closing_brace(masked, header.open_index)
    if close_index is None:
        return ParseFailure(
            FailureKind.UNBALANCED_BRACES,
            f"Enum {name} is not closed before the end of the text",
            header.start,
        )

    values = extract_values(masked[header.open_index + 1 : close_index])

    if not values:
        return ParseFailure(
            FailureKind.NO_VALUES, f"Enum {name} declares no values", header.start
        )

    for value in values:
        if not VALUE_NAME_PATTERN.fullmatch(value):
            return ParseFailure(
                FailureKind.INVALID_VALUE,
                f"Enum {name} has an unrecognized value: {value!r}",
                header.start,
            )

    if not allow_duplicates and len(set(values)) != len(values):
        duplicates = sorted({v for v in values if values.count(v) > 1})
        return ParseFailure(
            FailureKind.DUPLICATE_VALUES,
            f"Enum {name} repeats values: {', '.join(duplicates)}",
            header.start,
        )

    span = TextSpan.from_offsets(raw, header.start, close_index + 1)
    return EnumModel(name, tuple(values), span)


def parse(raw: str, allow_duplicates: bool = False) -> ParseResult:
    """
    Parse the first enum declaration in ``raw``.

    Args:
        raw: Text expected to contain an ``enum Name { ... }`` declaration
        allow_duplicates: Keep repeated value identifiers instead of failing

    Returns:
        EnumModel on success, ParseFailure otherwise
    """
    masked = mask_comments_and_strings(raw or "")
    header = find_enum_header(masked)

    if header is None:
        failure = ParseFailure(
            FailureKind.NO_ENUM_KEYWORD, "No enum declaration found in the input"
        )
        logger.debug("Parse failed: %s", failure)
        return failure

    result = _parse_header(raw, masked, header, allow_duplicates)
    if is_failure(result):
        logger.debug("Parse failed: %s", result)
    else:
        logger.debug("Parsed enum %s with %d values", result.name, len(result.values))
    return result


def parse_all(text: str, allow_duplicates: bool = False) -> List[EnumModel]:
    """
    Parse every well-formed enum declaration in a document.

    Declarations that fail to parse are skipped. Spans are relative to
    ``text``.
    """
    masked = mask_comments_and_strings(text or "")
    models = []
    position = 0

    while True:
        header = find_enum_header(masked, position)
        if header is None:
            break

        result = _parse_header(text, masked, header, allow_duplicates)
        if is_failure(result):
            logger.debug("Skipping declaration at offset %d: %s", header.start, result)
            position = header.open_index + 1
        else:
            models.append(result)
            position = result.source_range.end

    return models
