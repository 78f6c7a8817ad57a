from __future__ import annotations

import pytest

from multifs.paths import absolute, clean, is_under, strip_prefix


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", "."),
        (".", "."),
        ("/", "/"),
        ("//", "/"),
        ("/foo/", "/foo"),
        ("/foo//bar/./baz", "/foo/bar/baz"),
        ("/foo/../bar", "/bar"),
        ("/..", "/"),
        ("/../../x", "/x"),
        ("foo/..", "."),
        ("../foo", "../foo"),
        ("a/b/../../..", ".."),
    ],
)
def test_clean(raw: str, expected: str) -> None:
    assert clean(raw) == expected


def test_absolute_treats_relative_as_rooted() -> None:
    assert absolute(".") == "/"
    assert absolute("") == "/"
    assert absolute("quux/1.txt") == "/quux/1.txt"
    assert absolute("/quux/./1.txt") == "/quux/1.txt"


def test_is_under_respects_segment_boundaries() -> None:
    assert is_under("/a/b", "/a")
    assert is_under("/a", "/a")
    assert not is_under("/ab", "/a")
    assert is_under("/anything", "/")


def test_strip_prefix() -> None:
    assert strip_prefix("/a/b/f.txt", "/a/b") == "f.txt"
    assert strip_prefix("/a/b", "/a/b") == "."
    assert strip_prefix("/x/y", "/") == "x/y"
    assert strip_prefix("/", "/") == "."
