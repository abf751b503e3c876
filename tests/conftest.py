"""
Pytest configuration and shared fixtures for jsontree tests.

Provides immutable test data fixtures built from the json.org JSON_checker
corpus plus the basic value shapes.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from jsontree import InvalidEscapeSequence
from jsontree import InvalidNumberLiteral
from jsontree import JSONArray
from jsontree import JSONFalse
from jsontree import JSONNull
from jsontree import JSONNumber
from jsontree import JSONObject
from jsontree import JSONString
from jsontree import JSONTrue
from jsontree import ParseError
from jsontree import TrailingData
from jsontree import UnexpectedCharacter
from jsontree import UnexpectedEndOfInput


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_error: type[ParseError] | None = None


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must fail parsing per RFC 8259.

    Cases from json.org JSON_checker, each paired with the error variant it
    must raise. fail1 (scalar payload) is valid JSON today and fail18 (depth)
    depends on the configured limit; both are covered elsewhere.
    """
    fail_docs: list[tuple[int, str, type[ParseError]]] = [
        (2, '["Unclosed array"', UnexpectedEndOfInput),
        (3, '{unquoted_key: "keys must be quoted"}', UnexpectedCharacter),
        (4, '["extra comma",]', UnexpectedCharacter),
        (5, '["double extra comma",,]', UnexpectedCharacter),
        (6, '[   , "<-- missing value"]', UnexpectedCharacter),
        (7, '["Comma after the close"],', TrailingData),
        (8, '["Extra close"]]', TrailingData),
        (9, '{"Extra comma": true,}', UnexpectedCharacter),
        (
            10,
            '{"Extra value after close": true} "misplaced quoted value"',
            TrailingData,
        ),
        (11, '{"Illegal expression": 1 + 2}', UnexpectedCharacter),
        (12, '{"Illegal invocation": alert()}', UnexpectedCharacter),
        (13, '{"Numbers cannot have leading zeroes": 013}', InvalidNumberLiteral),
        (14, '{"Numbers cannot be hex": 0x14}', UnexpectedCharacter),
        (15, '["Illegal backslash escape: \\x15"]', InvalidEscapeSequence),
        (16, "[\\naked]", UnexpectedCharacter),
        (17, '["Illegal backslash escape: \\017"]', InvalidEscapeSequence),
        (19, '{"Missing colon" null}', UnexpectedCharacter),
        (20, '{"Double colon":: null}', UnexpectedCharacter),
        (21, '{"Comma instead of colon", null}', UnexpectedCharacter),
        (22, '["Colon instead of comma": false]', UnexpectedCharacter),
        (23, '["Bad value", truth]', UnexpectedCharacter),
        (24, "['single quote']", UnexpectedCharacter),
        (25, '["\ttab\tcharacter\tin\tstring\t"]', UnexpectedCharacter),
        (26, '["tab\\   character\\   in\\  string\\  "]', InvalidEscapeSequence),
        (27, '["line\nbreak"]', UnexpectedCharacter),
        (28, '["line\\\nbreak"]', InvalidEscapeSequence),
        (29, "[0e]", InvalidNumberLiteral),
        (30, "[0e+]", InvalidNumberLiteral),
        (31, "[0e+-1]", InvalidNumberLiteral),
        (32, '{"Comma instead if closing brace": true,', UnexpectedEndOfInput),
        (33, '["mismatch"}', UnexpectedCharacter),
    ]

    cases = [
        JsonTestCase(
            description=f"fail{number}.json",
            input_data=doc,
            should_fail=True,
            expected_error=error,
        )
        for number, doc, error in fail_docs
    ]
    # https://code.google.com/archive/p/simplejson/issues/3
    cases.append(
        JsonTestCase(
            description="raw control character in string",
            input_data='["A\u001fZ control characters in string"]',
            should_fail=True,
            expected_error=UnexpectedCharacter,
        )
    )
    return cases


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully per RFC 8259.

    These test cases validate standards compliance for valid JSON structures.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]""",
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, JSONNull()),
        JsonTestCase("true boolean", "true", False, JSONTrue()),
        JsonTestCase("false boolean", "false", False, JSONFalse()),
        JsonTestCase("integer", "42", False, JSONNumber(42.0)),
        JsonTestCase("negative integer", "-17", False, JSONNumber(-17.0)),
        JsonTestCase("float", "3.14", False, JSONNumber(3.14)),
        JsonTestCase("exponent", "2.5E-3", False, JSONNumber(0.0025)),
        JsonTestCase("empty string", '""', False, JSONString("")),
        JsonTestCase("simple string", '"hello"', False, JSONString("hello")),
        JsonTestCase("empty array", "[]", False, JSONArray([])),
        JsonTestCase("empty object", "{}", False, JSONObject({})),
        JsonTestCase(
            "simple array",
            "[1, 2, 3]",
            False,
            JSONArray([JSONNumber(1.0), JSONNumber(2.0), JSONNumber(3.0)]),
        ),
        JsonTestCase(
            "simple object",
            '{"key": "value"}',
            False,
            JSONObject({"key": JSONString("value")}),
        ),
    ]
