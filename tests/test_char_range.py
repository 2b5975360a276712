#!/usr/bin/env python3
"""
Tests for bracket expression parsing
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pathignore.char_range import CharacterRange, parse_char_range
from pathignore.errors import InvalidIndexError, NotARangeError, UnclosedRangeError


@pytest.mark.parametrize("text, expected", [
    ("[ab]", CharacterRange(False, (('a', 'a'), ('b', 'b')))),
    ("[!ab]", CharacterRange(True, (('a', 'a'), ('b', 'b')))),
    ("[--0abc-z]", CharacterRange(False, (('-', '0'), ('a', 'a'), ('b', 'b'), ('c', 'z')))),
    ("[-]", CharacterRange(False, (('-', '-'),))),
    ("[a-z0-9]", CharacterRange(False, (('a', 'z'), ('0', '9')))),
    ("[a-z[0-9]", CharacterRange(False, (('a', 'z'), ('[', '['), ('0', '9')))),
    ("[][!]", CharacterRange(False, ((']', ']'), ('[', '['), ('!', '!')))),
    ("[]-]", CharacterRange(False, ((']', ']'), ('-', '-')))),
    ("[a-z\\\\]", CharacterRange(False, (('a', 'z'), ('\\', '\\')))),
    ("[!]]", CharacterRange(True, ((']', ']'),))),
    ("[a-]", CharacterRange(False, (('a', 'a'), ('-', '-')))),
])
def test_parse_char_range(text, expected):
    """Ranges come back in encounter order and the end index is the closing ']'"""
    char_range, end_index = parse_char_range(text, 0)
    assert char_range == expected
    assert end_index == len(text) - 1


def test_escaped_characters_are_literal():
    """An escaped ']' does not close and an escaped '-' does not form an interval"""
    char_range, end_index = parse_char_range("[\\]\\-x]", 0)
    assert char_range.ranges == ((']', ']'), ('-', '-'), ('x', 'x'))
    assert end_index == 6


def test_escaped_character_can_start_interval():
    char_range, _ = parse_char_range("[a-z\\0-9]", 0)
    assert char_range.ranges == (('a', 'z'), ('0', '9'))


def test_parse_at_offset():
    """Parsing starts at the given index and reports an absolute end index"""
    char_range, end_index = parse_char_range("ab[cd]ef", 2)
    assert char_range.ranges == (('c', 'c'), ('d', 'd'))
    assert end_index == 5


@pytest.mark.parametrize("text", ["[-", "[", "[!", "[ab", "[]", "[a\\]", "[a-\\"])
def test_unclosed_range(text):
    with pytest.raises(UnclosedRangeError):
        parse_char_range(text, 0)


@pytest.mark.parametrize("index", [-1, 4, 10])
def test_invalid_index(index):
    with pytest.raises(InvalidIndexError):
        parse_char_range("[ab]", index)


def test_not_a_range():
    with pytest.raises(NotARangeError):
        parse_char_range("a[b]", 0)


def test_contains():
    digits, _ = parse_char_range("[0-9_]", 0)
    assert digits.contains('5')
    assert digits.contains('_')
    assert not digits.contains('a')

    not_digits, _ = parse_char_range("[!0-9]", 0)
    assert not not_digits.contains('5')
    assert not_digits.contains('a')


def test_membership_ignores_interval_order():
    forward = CharacterRange(False, (('a', 'c'), ('x', 'x')))
    backward = CharacterRange(False, (('x', 'x'), ('a', 'c')))
    for char in "abcxyz":
        assert forward.contains(char) == backward.contains(char)
