"""
Fuzzy string matching — Jaro-Winkler similarity at word and phrase level.

Jaro-Winkler rewards shared prefixes and tolerates transpositions, which is
what typing mistakes in project names and priority words look like
("urgnt", "ck alumi", "hepl protal").

Two granularities are scored because a typo can sit inside any single word
of a multi-word term: comparing only whole phrases under-scores
"hepl protal" against "hepl portal" when surrounded by other text.
"""
from typing import List

import numpy as np
from rapidfuzz.distance import JaroWinkler


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive Jaro-Winkler similarity in [0.0, 1.0].

    Empty or missing input scores 0.0.
    """
    if not a or not b:
        return 0.0
    return float(np.clip(JaroWinkler.similarity(a.lower(), b.lower()), 0.0, 1.0))


def find_best_similarity_in_content(content: str, term: str) -> float:
    """
    Best similarity between *term* and any part of *content*.

    Scoring:
        1. Literal (case-insensitive) substring → 1.0, immediately.
        2. Max similarity of *term* against every whitespace token.
        3. If *term* has several words, max similarity against every window of
           the same number of consecutive tokens, scored as a phrase.

    Returns:
        The maximum over all comparisons, in [0.0, 1.0].
    """
    if not content or not term:
        return 0.0

    content_lower = content.lower()
    term_lower = term.lower().strip()
    if not term_lower:
        return 0.0

    if term_lower in content_lower:
        return 1.0

    words: List[str] = content_lower.split()
    if not words:
        return 0.0

    scores = [JaroWinkler.similarity(word, term_lower) for word in words]

    term_words = term_lower.split()
    if len(term_words) > 1:
        window = len(term_words)
        for i in range(len(words) - window + 1):
            phrase = " ".join(words[i : i + window])
            scores.append(JaroWinkler.similarity(phrase, term_lower))

    return float(np.clip(max(scores), 0.0, 1.0))
