"""
Recursive-descent JSON parser producing a strongly-typed value tree.

Converts JSON text into a closed set of immutable value classes. Parsing is a
single forward pass over the text; the first grammar violation aborts with a
ParseError subclass carrying the position and context needed to report it.
"""

import logging
import os
import sys
import time
from dataclasses import dataclass
from dataclasses import field
from typing import IO
from typing import Any
from typing import TypeAlias

from jsontree._utf8_mapper import UTF8PositionMapper

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

Position: TypeAlias = int

DEFAULT_MAX_DEPTH = 256

# Stack frames kept free for the caller, and frames spent per nesting level
# (parse_value -> parse_array/parse_object).
_RECURSION_RESERVE = 100
_FRAMES_PER_LEVEL = 2

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_EXPONENT_MARKERS = frozenset("eE")
_EXPONENT_SIGNS = frozenset("+-")
_CONTROL_LIMIT = 0x20

_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JSONTREE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, chars_to_process: int = 0):
            self.func_name = func_name
            self.chars = chars_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


# Value model


@dataclass(frozen=True)
class JSONNull:
    """JSON ``null``."""

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JSONTrue:
    """JSON ``true``."""

    def to_python(self) -> bool:
        return True


@dataclass(frozen=True)
class JSONFalse:
    """JSON ``false``."""

    def to_python(self) -> bool:
        return False


@dataclass(frozen=True)
class JSONNumber:
    """
    JSON number.

    Integer and fractional literals both normalize to a 64-bit float.
    """

    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JSONString:
    """JSON string with all escape sequences decoded."""

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class JSONArray:
    """JSON array; element order is preserved exactly as parsed."""

    items: list["JSONValue"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "JSONValue":
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JSONObject:
    """
    JSON object mapping unique keys to values.

    Key order carries no meaning: two objects with the same members compare
    equal regardless of the order they were written in.
    """

    members: dict[str, "JSONValue"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, key: str) -> "JSONValue":
        return self.members[key]

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}


JSONValue: TypeAlias = (
    JSONNull | JSONTrue | JSONFalse | JSONNumber | JSONString | JSONArray | JSONObject
)


# Errors


class ParseError(ValueError):
    """
    Handles JSON parsing failures with precise position and context information.

    Base of the closed set of parse failures. Carries the offending document,
    the code-point offset of the failure and the derived line/column numbers
    so callers can report a diagnostic without rescanning the input.
    """

    kind = "Parse Error"

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    @property
    def byte_offset(self) -> int:
        """UTF-8 byte offset of ``pos`` within ``doc``."""
        return UTF8PositionMapper(self.doc).char_to_byte(self.pos)

    def render(self) -> str:
        """
        Formats a multi-line diagnostic pointing at the failure.

        Shows the line before the failure (when there is one) and the failing
        line, a caret under the offending column, and a one-line summary.
        """
        lines = self.doc.split("\n")
        error_line = lines[self.lineno - 1].rstrip("\r")
        previous_line = lines[self.lineno - 2].rstrip("\r") if self.lineno > 1 else None

        width = max(len(error_line), len(previous_line or ""), 1)
        indent = " " * (self.colno - 1)

        out = ["-" * width]
        if previous_line is not None:
            out.append(previous_line)
        out.append(error_line)
        out.append(f"{indent}^")
        out.extend([f"{indent}|"] * 2)
        out.append(f"Error: {self.kind} on Line {self.lineno} Char {self.colno}")
        return "\n".join(out)


class UnexpectedEndOfInput(ParseError):
    """Input ended while a value, string, escape or literal was incomplete."""

    kind = "Unexpected End Of Input"

    def __init__(self, doc: str = "") -> None:
        super().__init__("Unexpected end of input", doc, len(doc))


class UnexpectedCharacter(ParseError):
    """A character matched no token valid at its grammar position."""

    kind = "Unexpected Character"

    def __init__(
        self, found: str, doc: str = "", pos: Position = 0, expected: str = ""
    ) -> None:
        self.found = found
        self.expected = expected
        msg = f"Unexpected character {found!r}"
        if expected:
            msg = f"{msg}, expecting {expected}"
        super().__init__(msg, doc, pos)


class InvalidNumberLiteral(ParseError):
    """Sign, digit, fraction or exponent sequence breaks the number grammar."""

    kind = "Invalid Number Literal"

    def __init__(
        self, msg: str = "Invalid number literal", doc: str = "", pos: Position = 0
    ) -> None:
        super().__init__(msg, doc, pos)


class InvalidEscapeSequence(ParseError):
    """Unknown escape character, malformed ``\\u`` escape or bad surrogate."""

    kind = "Invalid Escape Sequence"

    def __init__(
        self, msg: str = "Invalid escape sequence", doc: str = "", pos: Position = 0
    ) -> None:
        super().__init__(msg, doc, pos)


class TrailingData(ParseError):
    """Non-whitespace content follows a complete top-level value."""

    kind = "Trailing Data"

    def __init__(self, doc: str = "", pos: Position = 0) -> None:
        super().__init__("Extra data", doc, pos)


class NestingTooDeep(ParseError):
    """Arrays and objects nest deeper than the configured maximum."""

    kind = "Nesting Too Deep"

    def __init__(self, doc: str = "", pos: Position = 0, limit: int = 0) -> None:
        self.limit = limit
        super().__init__(f"Maximum nesting depth of {limit} exceeded", doc, pos)


# Configuration


def depth_clamp(requested_depth: int) -> int:
    """
    Clamps a nesting limit to what the interpreter's recursion limit allows.

    Each nesting level costs two Python frames; a fixed reserve is kept for
    the caller. Logs a warning when clamping occurs.
    """
    safe_depth = max(
        1, (sys.getrecursionlimit() - _RECURSION_RESERVE) // _FRAMES_PER_LEVEL
    )
    if requested_depth > safe_depth:
        logger.warning(
            "max_depth %d exceeds recursion limit, clamping to %d",
            requested_depth,
            safe_depth,
        )
        return safe_depth
    return requested_depth


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    max_depth bounds array/object nesting so adversarial input cannot
    exhaust the interpreter stack.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        object.__setattr__(self, "max_depth", depth_clamp(self.max_depth))


# Cursor and parser


class JsonCursor:
    """
    Forward-only, position-tracked view over the input text.

    One character of lookahead is all the grammar needs; ``peek`` returns an
    empty string once the text is exhausted.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else ""

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def at_end(self) -> bool:
        return self.pos >= self.length

    def skip_whitespace(self) -> None:
        """Skips the four JSON whitespace characters."""
        with ProfileContext("skip_whitespace"):
            while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
                self.pos += 1

    def unexpected(self, expected: str = "") -> ParseError:
        """Builds the error for whatever sits at the current position."""
        if self.pos >= self.length:
            return UnexpectedEndOfInput(self.text)
        return UnexpectedCharacter(self.text[self.pos], self.text, self.pos, expected)

    def expect(self, char: str, expected: str = "") -> None:
        """Consumes ``char`` or raises at the mismatching position."""
        if self.peek() != char:
            raise self.unexpected(expected or repr(char))
        self.pos += 1


_LITERALS: dict[str, tuple[str, type[JSONNull | JSONTrue | JSONFalse]]] = {
    "n": ("null", JSONNull),
    "t": ("true", JSONTrue),
    "f": ("false", JSONFalse),
}


class JsonParser:
    """
    Recursive descent parser building the value tree from a cursor.

    One method per grammar production; containers recurse through
    parse_value, so the call stack tracks JSON nesting directly and a depth
    counter bounds it.
    """

    def __init__(self, cursor: JsonCursor, config: ParseConfig):
        self.cursor = cursor
        self.config = config
        self.depth = 0
        self._key_cache: dict[str, str] = {}

    def parse_document(self) -> JSONValue:
        """Parses exactly one value and rejects anything after it."""
        value = self.parse_value()
        if not self.cursor.at_end():
            raise TrailingData(self.cursor.text, self.cursor.pos)
        return value

    def parse_value(self) -> JSONValue:
        """Dispatches on the first non-whitespace character."""
        cursor = self.cursor
        cursor.skip_whitespace()
        char = cursor.peek()

        value: JSONValue
        if char == '"':
            value = JSONString(self.parse_string())
        elif char == "{":
            value = self.parse_object()
        elif char == "[":
            value = self.parse_array()
        elif char in _LITERALS:
            value = self.parse_literal(*_LITERALS[char])
        elif char == "-" or char in _DIGITS:
            value = self.parse_number()
        else:
            raise cursor.unexpected("value")

        cursor.skip_whitespace()
        return value

    def parse_literal(
        self, word: str, variant: type[JSONNull | JSONTrue | JSONFalse]
    ) -> JSONNull | JSONTrue | JSONFalse:
        """Matches ``word`` exactly, one character at a time."""
        with ProfileContext("parse_literal", len(word)):
            cursor = self.cursor
            for char in word:
                cursor.expect(char, f"literal '{word}'")
            return variant()

    def parse_number(self) -> JSONNumber:
        """Scans a number literal and converts it to a float."""
        with ProfileContext("parse_number"):
            cursor = self.cursor
            start = cursor.pos

            if cursor.peek() == "-":
                cursor.advance()

            self._scan_integer_part()
            self._scan_fraction_part()
            self._scan_exponent_part()

            # float() saturates to +/-inf on overflow
            return JSONNumber(float(cursor.text[start : cursor.pos]))

    def _scan_digits(self, msg: str) -> None:
        """Consumes one or more ASCII digits."""
        cursor = self.cursor
        if cursor.peek() not in _DIGITS:
            raise InvalidNumberLiteral(msg, cursor.text, cursor.pos)
        while cursor.peek() in _DIGITS:
            cursor.pos += 1

    def _scan_integer_part(self) -> None:
        """Scans the integer part; a leading zero stands alone."""
        cursor = self.cursor
        if cursor.peek() == "0":
            cursor.advance()
            if cursor.peek() in _DIGITS:
                raise InvalidNumberLiteral(
                    "Leading zeros not allowed", cursor.text, cursor.pos
                )
        else:
            self._scan_digits("Expecting digit")

    def _scan_fraction_part(self) -> None:
        """Scans the fraction part of a number if present."""
        if self.cursor.peek() == ".":
            self.cursor.advance()
            self._scan_digits("Expecting digit after decimal point")

    def _scan_exponent_part(self) -> None:
        """Scans the exponent part of a number if present."""
        cursor = self.cursor
        if cursor.peek() in _EXPONENT_MARKERS:
            cursor.advance()
            if cursor.peek() in _EXPONENT_SIGNS:
                cursor.advance()
            self._scan_digits("Expecting digit in exponent")

    def parse_string(self) -> str:
        """
        Parses a quoted string, returning its decoded text.

        Runs of plain characters are sliced from the source in one piece;
        escapes are decoded individually.
        """
        with ProfileContext("parse_string"):
            cursor = self.cursor
            text = cursor.text
            cursor.expect('"', "string")

            chunks: list[str] = []
            run_start = cursor.pos
            while True:
                char = cursor.peek()
                if not char:
                    raise UnexpectedEndOfInput(text)
                if char == '"':
                    chunks.append(text[run_start : cursor.pos])
                    cursor.pos += 1
                    return "".join(chunks)
                if char == "\\":
                    chunks.append(text[run_start : cursor.pos])
                    chunks.append(self._decode_escape())
                    run_start = cursor.pos
                elif ord(char) < _CONTROL_LIMIT:
                    raise UnexpectedCharacter(
                        char, text, cursor.pos, "unescaped string character"
                    )
                else:
                    cursor.pos += 1

    def _decode_escape(self) -> str:
        """Decodes the escape sequence starting at the current backslash."""
        cursor = self.cursor
        text = cursor.text
        start = cursor.pos
        cursor.advance()

        char = cursor.peek()
        if not char:
            raise UnexpectedEndOfInput(text)
        if char in _ESCAPE_MAP:
            cursor.pos += 1
            return _ESCAPE_MAP[char]
        if char != "u":
            raise InvalidEscapeSequence(
                f"Invalid escape sequence: \\{char}", text, start
            )
        cursor.pos += 1

        code_unit = self._read_hex_quad(start)
        if code_unit in _LOW_SURROGATES:
            raise InvalidEscapeSequence("Unpaired low surrogate", text, start)
        if code_unit not in _HIGH_SURROGATES:
            return chr(code_unit)

        # A high surrogate must be followed immediately by a \u low surrogate
        low_start = cursor.pos
        for marker in "\\u":
            char = cursor.peek()
            if not char:
                raise UnexpectedEndOfInput(text)
            if char != marker:
                raise InvalidEscapeSequence("Unpaired high surrogate", text, start)
            cursor.pos += 1

        low = self._read_hex_quad(low_start)
        if low not in _LOW_SURROGATES:
            raise InvalidEscapeSequence("Invalid low surrogate", text, low_start)
        return chr(0x10000 + ((code_unit - 0xD800) << 10) + (low - 0xDC00))

    def _read_hex_quad(self, escape_start: Position) -> int:
        """Reads the four hex digits of a ``\\u`` escape."""
        cursor = self.cursor
        value = 0
        for _ in range(4):
            char = cursor.peek()
            if not char:
                raise UnexpectedEndOfInput(cursor.text)
            if char not in _HEX_DIGITS:
                raise InvalidEscapeSequence(
                    "Invalid \\u escape: expecting four hex digits",
                    cursor.text,
                    escape_start,
                )
            value = value * 16 + int(char, 16)
            cursor.pos += 1
        return value

    def _enter_container(self) -> None:
        """Counts one nesting level, failing at the opening bracket."""
        if self.depth >= self.config.max_depth:
            raise NestingTooDeep(
                self.cursor.text, self.cursor.pos, self.config.max_depth
            )
        self.depth += 1

    def parse_array(self) -> JSONArray:
        """Parses a bracketed, comma-separated list of values."""
        with ProfileContext("parse_array"):
            cursor = self.cursor
            self._enter_container()
            try:
                cursor.expect("[")
                cursor.skip_whitespace()

                items: list[JSONValue] = []
                if cursor.peek() == "]":
                    cursor.advance()
                    return JSONArray(items)

                while True:
                    items.append(self.parse_value())
                    char = cursor.peek()
                    if char == ",":
                        cursor.advance()
                    elif char == "]":
                        cursor.advance()
                        return JSONArray(items)
                    else:
                        raise cursor.unexpected("',' or ']'")
            finally:
                self.depth -= 1

    def _intern_key(self, key: str) -> str:
        """Reuses one string object per distinct key within a document."""
        return self._key_cache.setdefault(key, key)

    def parse_object(self) -> JSONObject:
        """
        Parses a braced list of key/value members.

        A repeated key keeps the value written last.
        """
        with ProfileContext("parse_object"):
            cursor = self.cursor
            self._enter_container()
            try:
                cursor.expect("{")
                cursor.skip_whitespace()

                members: dict[str, JSONValue] = {}
                if cursor.peek() == "}":
                    cursor.advance()
                    return JSONObject(members)

                while True:
                    if cursor.peek() != '"':
                        raise cursor.unexpected(
                            "property name enclosed in double quotes"
                        )
                    key = self._intern_key(self.parse_string())
                    cursor.skip_whitespace()
                    cursor.expect(":", "':' delimiter")
                    members[key] = self.parse_value()

                    char = cursor.peek()
                    if char == ",":
                        cursor.advance()
                        cursor.skip_whitespace()
                    elif char == "}":
                        cursor.advance()
                        return JSONObject(members)
                    else:
                        raise cursor.unexpected("',' or '}'")
            finally:
                self.depth -= 1


def _parse_document(text: str, config: ParseConfig) -> JSONValue:
    """Runs one parse over ``text``, logging the outcome."""
    with ProfileContext("parse", len(text)):
        parser = JsonParser(JsonCursor(text), config)
        try:
            value = parser.parse_document()
        except ParseError as err:
            logger.debug("Parse failed: %s", err)
            raise
        logger.debug(
            "Parsed %d characters into %s", len(text), type(value).__name__
        )
        return value


def parse(text: str, **kwargs: Any) -> JSONValue:
    """
    Parses a JSON document into a value tree.

    Keyword arguments build the ParseConfig. Raises a ParseError subclass on
    the first grammar violation; no partial value is ever returned.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON document must be str, not {type(text).__name__}"
        )

    config = ParseConfig(**kwargs)
    return _parse_document(text, config)


def load(fp: IO[str], **kwargs: Any) -> JSONValue:
    """
    Parses the JSON document read from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "HotPathStats",
    "InvalidEscapeSequence",
    "InvalidNumberLiteral",
    "JSONArray",
    "JSONFalse",
    "JSONNull",
    "JSONNumber",
    "JSONObject",
    "JSONString",
    "JSONTrue",
    "JSONValue",
    "JsonCursor",
    "JsonParser",
    "NestingTooDeep",
    "ParseConfig",
    "ParseError",
    "TrailingData",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "clear_hot_path_stats",
    "depth_clamp",
    "get_hot_path_stats",
    "load",
    "parse",
]
