"""Word-level searches over implicit graphs."""

from graph_engine.words.word_ladder import WordLadderResult, find_word_ladder

__all__ = [
    "WordLadderResult",
    "find_word_ladder",
]
