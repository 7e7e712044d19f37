"""Shortest word ladder via bidirectional breadth-first search.

The graph is implicit: two words are adjacent when they have the same
length and differ in exactly one position.  Neighbors are generated on
the fly by trying every letter of the alphabet at every position, so a
word of length L has up to 25 * L candidates.  A one-sided BFS frontier
grows by roughly that factor per step; growing one frontier from each
end and meeting in the middle halves the depth each side has to reach.

Each side keeps a visited map from word to the path from that side's
origin to the word (origin first).  A side's turn expands exactly one
BFS level.  Because the two visited sets are disjoint until the first
meeting, every meeting found during a level yields a path of the same,
minimal, length; the search keeps the first one seen and returns once
that level is finished.

Candidates must be in the dictionary, except that each side may also
step onto the other side's origin.  That is how a begin word that is
not listed still gets reached from the end side.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator

from graph_engine.config import DEFAULT_LIMITS, EngineLimits
from graph_engine.errors import InvalidInputError


@dataclass(slots=True)
class WordLadderResult:
    """Result of a word ladder search."""
    found: bool
    path: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"found": self.found, "path": self.path}


def _one_letter_variants(word: str, alphabet: str) -> Iterator[str]:
    for i, current in enumerate(word):
        prefix, suffix = word[:i], word[i + 1:]
        for ch in alphabet:
            if ch != current:
                yield prefix + ch + suffix


def _validate(
    begin_word: Any, end_word: Any, word_list: Any, limits: EngineLimits
) -> None:
    if not isinstance(begin_word, str):
        raise InvalidInputError(
            f"beginWord must be a string, got {type(begin_word).__name__}"
        )
    if not isinstance(end_word, str):
        raise InvalidInputError(
            f"endWord must be a string, got {type(end_word).__name__}"
        )
    if len(begin_word) != len(end_word):
        raise InvalidInputError(
            f"beginWord and endWord lengths differ "
            f"({len(begin_word)} != {len(end_word)})"
        )
    if not isinstance(word_list, (list, tuple)):
        raise InvalidInputError(
            f"wordList must be a list, got {type(word_list).__name__}"
        )
    if len(word_list) > limits.max_words:
        raise InvalidInputError(
            f"wordList has {len(word_list)} words, limit is {limits.max_words}"
        )
    for pos, word in enumerate(word_list):
        if not isinstance(word, str):
            raise InvalidInputError(
                f"wordList[{pos}] must be a string, got {word!r}"
            )


def _expand_level(
    queue: deque[str],
    visited: dict[str, list[str]],
    other_visited: dict[str, list[str]],
    dictionary: set[str],
    other_origin: str,
    alphabet: str,
    from_begin: bool,
) -> list[str] | None:
    """Expand one full BFS level of one side.

    Returns the first full begin-to-end path discovered, or None if the
    level produced no meeting point.
    """
    best: list[str] | None = None
    for _ in range(len(queue)):
        word = queue.popleft()
        path = visited[word]
        for candidate in _one_letter_variants(word, alphabet):
            if candidate in visited:
                continue
            if candidate not in dictionary and candidate != other_origin:
                continue
            new_path = path + [candidate]
            visited[candidate] = new_path
            if candidate in other_visited:
                if best is None:
                    other_path = other_visited[candidate]
                    if from_begin:
                        best = new_path + other_path[-2::-1]
                    else:
                        best = other_path + new_path[-2::-1]
                continue
            queue.append(candidate)
    return best


def find_word_ladder(
    begin_word: str,
    end_word: str,
    word_list: list[str],
    limits: EngineLimits | None = None,
) -> WordLadderResult:
    """Find a shortest transformation chain from *begin_word* to *end_word*.

    Each step changes exactly one character and lands on a word from
    *word_list* (or on *end_word*).  *end_word* must be in *word_list*;
    *begin_word* need not be.

    Raises InvalidInputError when the arguments are not strings / a
    list of strings, or when the two words differ in length.
    """
    limits = limits or DEFAULT_LIMITS
    _validate(begin_word, end_word, word_list, limits)

    dictionary = set(word_list)
    if end_word not in dictionary:
        return WordLadderResult(found=False, path=None)
    if begin_word == end_word:
        return WordLadderResult(found=True, path=[begin_word])

    begin_queue: deque[str] = deque([begin_word])
    end_queue: deque[str] = deque([end_word])
    begin_visited: dict[str, list[str]] = {begin_word: [begin_word]}
    end_visited: dict[str, list[str]] = {end_word: [end_word]}

    while begin_queue and end_queue:
        path = _expand_level(
            begin_queue, begin_visited, end_visited,
            dictionary, end_word, limits.alphabet, from_begin=True,
        )
        if path is not None:
            return WordLadderResult(found=True, path=path)

        path = _expand_level(
            end_queue, end_visited, begin_visited,
            dictionary, begin_word, limits.alphabet, from_begin=False,
        )
        if path is not None:
            return WordLadderResult(found=True, path=path)

    return WordLadderResult(found=False, path=None)
