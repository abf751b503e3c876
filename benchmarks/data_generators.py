"""
Test documents for JSON parsing benchmarks.

Each generator exercises a different part of the parser:
- Object and array construction at several sizes
- Deep nesting close to the default depth limit
- String decoding with escapes, raw non-ASCII text and surrogate pairs
- Number scanning with signs, fractions and exponents
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_SIMPLE_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]
_NON_ASCII_SAMPLES = "éüßøçñ☃€✓中文日本語한국어"
_ASTRAL_SAMPLES = ["\U0001f600", "\U0001f680", "\U0001d11e", "\U00010348"]


def generate_test_data(data_type: str) -> str:
    """Generates a JSON document of the named shape."""
    generators: dict[str, Callable[[random.Random], str]] = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "deep_array": _generate_deep_array,
        "string_heavy": _generate_string_heavy,
        "unicode_heavy": _generate_unicode_heavy,
        "number_heavy": _generate_number_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    # Same document on every run so timings are comparable
    return generators[data_type](random.Random(_SEED))


DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "deep_array",
    "string_heavy",
    "unicode_heavy",
    "number_heavy",
]


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small configuration-style object (< 1KB)."""
    data = {
        "name": "jsontree",
        "version": 3,
        "debug": False,
        "threshold": 0.75,
        "owner": None,
        "paths": ["/etc/app", "/var/lib/app"],
        "limits": {"depth": 256, "timeout": 1.5e1},
    }
    return json.dumps(data)


def _generate_large_object(rng: random.Random) -> str:
    """Generates a large record-style object (> 10KB)."""
    data = {
        "catalog_id": rng.randint(1000000, 9999999),
        "region": rng.choice(["eu-west", "us-east", "ap-south"]),
        "products": [
            {
                "sku": f"sku_{i:05d}",
                "title": _random_string(rng, 24),
                "price": round(rng.uniform(1.0, 500.0), 2),
                "in_stock": rng.choice([True, False]),
                "discontinued": None if i % 7 else True,
                "tags": [_random_string(rng, 6) for _ in range(rng.randint(0, 4))],
                "dimensions": {
                    "w": rng.randint(1, 100),
                    "h": rng.randint(1, 100),
                    "d": rng.randint(1, 100),
                },
            }
            for i in range(60)
        ],
        "audit": [
            {
                "at": f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
                "action": rng.choice(["create", "update", "delete"]),
                "actor": _random_string(rng, 10),
            }
            for _ in range(40)
        ],
    }
    return json.dumps(data)


def _generate_mixed_array(rng: random.Random) -> str:
    """Generates a long array cycling through every value kind."""
    makers: list[Callable[[int], Any]] = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "label": _random_string(rng, 8)},
        lambda i: [i, str(i), []],
    ]
    return json.dumps([rng.choice(makers)(i) for i in range(300)])


def _generate_nested_structure(rng: random.Random) -> str:
    """Generates a wide tree of objects eight levels deep."""

    def create_node(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"leaf": _random_string(rng, 10)}

        return {
            "depth": depth,
            "children": [create_node(depth - 1) for _ in range(3)],
            "next": create_node(depth - 1) if depth % 2 else None,
        }

    return json.dumps(create_node(8))


def _generate_deep_array(rng: random.Random) -> str:
    """Generates arrays nested just under the default depth limit."""
    depth = 250
    return "[" * depth + str(rng.randint(0, 9)) + "]" * depth


def _generate_string_heavy(rng: random.Random) -> str:
    """Generates strings dense with short escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_SIMPLE_ESCAPES))
            else:
                chars.append(rng.choice(string.ascii_letters + string.digits + " "))
        return "".join(chars)

    entries = ", ".join(f'"{create_escaped_string()}"' for _ in range(150))
    return f'{{"strings": [{entries}]}}'


def _generate_unicode_heavy(rng: random.Random) -> str:
    """Generates raw non-ASCII text alongside \\u escapes and surrogate pairs."""
    raw = [
        "".join(rng.choice(_NON_ASCII_SAMPLES) for _ in range(30))
        + rng.choice(_ASTRAL_SAMPLES)
        for _ in range(60)
    ]
    escaped = [
        "".join(rng.choice(_NON_ASCII_SAMPLES + _ASTRAL_SAMPLES[0]) for _ in range(30))
        for _ in range(60)
    ]
    return (
        '{"raw": '
        + json.dumps(raw, ensure_ascii=False)
        + ', "escaped": '
        + json.dumps(escaped, ensure_ascii=True)
        + "}"
    )


def _generate_number_heavy(rng: random.Random) -> str:
    """Generates numbers in every lexical form the grammar allows."""
    forms: list[Callable[[], str]] = [
        lambda: str(rng.randint(-(10**12), 10**12)),
        lambda: f"{rng.uniform(-1e6, 1e6):.6f}",
        lambda: f"{rng.uniform(1, 10):.3f}e{rng.randint(-300, 300)}",
        lambda: f"{rng.randint(1, 9)}E+{rng.randint(0, 20)}",
        lambda: f"-0.{rng.randint(0, 999999):06d}",
        lambda: "0",
    ]
    return "[" + ",".join(rng.choice(forms)() for _ in range(500)) + "]"


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random ASCII string of the given length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
