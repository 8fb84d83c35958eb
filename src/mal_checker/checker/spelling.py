"""
Opcode Spelling Suggester
=========================

When an opcode is not recognized, the checker looks for a known opcode
one edit away and offers it as a suggestion:

    ** error: invalid opcode 'MVEI' - did you mean 'MOVEI'?

The edit-distance-1 neighbourhood of a word is generated in a fixed order,
and the first candidate found in the vocabulary wins:

1. deletions, by ascending position
2. insertions, by ascending position, then ascending letter
3. substitutions, by ascending position, then ascending letter
   (the no-op substitution that reproduces the word is skipped)
4. transpositions of adjacent pairs, by ascending position

Insertion and substitution draw letters from an alphabet, uppercase A-Z by
default because every MAL opcode is uppercase.
"""

from itertools import chain
from typing import Collection, Iterator, Optional
import string


DEFAULT_ALPHABET = string.ascii_uppercase


def deletions(word: str) -> Iterator[str]:
    for i in range(len(word)):
        yield word[:i] + word[i + 1:]


def insertions(word: str, alphabet: str = DEFAULT_ALPHABET) -> Iterator[str]:
    for i in range(len(word) + 1):
        for letter in alphabet:
            yield word[:i] + letter + word[i:]


def substitutions(word: str, alphabet: str = DEFAULT_ALPHABET) -> Iterator[str]:
    for i in range(len(word)):
        for letter in alphabet:
            if letter != word[i]:
                yield word[:i] + letter + word[i + 1:]


def transpositions(word: str) -> Iterator[str]:
    for i in range(len(word) - 1):
        yield word[:i] + word[i + 1] + word[i] + word[i + 2:]


def edit_distance_one(word: str, alphabet: str = DEFAULT_ALPHABET) -> Iterator[str]:
    """
    Yield every string one edit away from word, in suggestion order.

    Candidates may repeat (e.g. deleting either 'D' from "ADD"); callers
    that only want the first match do not need them de-duplicated.
    """
    return chain(
        deletions(word),
        insertions(word, alphabet),
        substitutions(word, alphabet),
        transpositions(word),
    )


def suggest(
    word: str,
    vocabulary: Collection[str],
    alphabet: str = DEFAULT_ALPHABET,
) -> Optional[str]:
    """
    Return the first edit-distance-1 neighbour of word in vocabulary.

    Args:
        word: The misspelled token
        vocabulary: Known words (for MAL, the opcode mnemonics)
        alphabet: Letters used for insertions and substitutions

    Returns:
        The suggestion, or None if no neighbour is known
    """
    if all(abs(len(word) - len(known)) > 1 for known in vocabulary):
        return None
    for candidate in edit_distance_one(word, alphabet):
        if candidate in vocabulary:
            return candidate
    return None
