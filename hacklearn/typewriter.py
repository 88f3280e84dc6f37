"""Typewriter effect for the home page headline, as a stream of frames.

Each frame is the visible text and how long to show it, in milliseconds.
A word is typed one character per ``delay``, held for ``hold`` once
complete, erased one character per ``erase_delay``, and then the next word
starts. The words cycle forever; take a slice with ``itertools.islice``.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

__all__ = ["Frame", "typewriter_frames"]

Frame = Tuple[str, int]


def typewriter_frames(
    words: Sequence[str],
    delay: int = 100,
    hold: int = 1000,
    erase_delay: int = 40,
) -> Iterator[Frame]:
    if not words:
        return
    index = 0
    while True:
        word = words[index % len(words)]
        for end in range(1, len(word) + 1):
            yield word[:end], delay
        # Full word stays up for ``hold`` before erasing begins
        yield word, hold
        for end in range(len(word) - 1, -1, -1):
            yield word[:end], erase_delay
        index = (index + 1) % len(words)
