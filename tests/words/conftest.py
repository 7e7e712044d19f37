"""Shared fixtures and a reference BFS for the word ladder tests."""
from __future__ import annotations

import string
from collections import deque

import pytest

SEED = 42


def one_letter_apart(a: str, b: str) -> bool:
    return len(a) == len(b) and sum(x != y for x, y in zip(a, b)) == 1


def assert_valid_ladder(path: list[str], begin: str, end: str, words: set[str]) -> None:
    assert path[0] == begin
    assert path[-1] == end
    for a, b in zip(path, path[1:]):
        assert one_letter_apart(a, b), f"{a!r} -> {b!r} is not a one-letter step"
    for w in path[1:]:
        assert w in words, f"{w!r} is not in the word list"


def reference_ladder_length(begin: str, end: str, words: list[str]) -> int:
    """Plain one-sided BFS; returns the word count of a shortest ladder, or 0."""
    dictionary = set(words)
    if end not in dictionary:
        return 0
    seen = {begin}
    q: deque[tuple[str, int]] = deque([(begin, 1)])
    while q:
        word, depth = q.popleft()
        if word == end:
            return depth
        for i in range(len(word)):
            for ch in string.ascii_lowercase:
                nxt = word[:i] + ch + word[i + 1:]
                if nxt in dictionary and nxt not in seen:
                    seen.add(nxt)
                    q.append((nxt, depth + 1))
    return 0


@pytest.fixture
def classic_words() -> list[str]:
    return ["hot", "dot", "dog", "lot", "log", "cog"]
