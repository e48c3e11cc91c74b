"""
Text normalization for poll responses.
"""

import unicodedata
from typing import FrozenSet, List


# Common English function words: articles, pronouns, prepositions,
# conjunctions and auxiliary verbs. Stored already normalized.
STOPWORDS: FrozenSet[str] = frozenset({
    # articles and determiners
    "a", "an", "the", "this", "that", "these", "those", "some", "any", "each",
    "every", "no", "all", "both", "such",
    # pronouns
    "i", "me", "my", "mine", "myself", "you", "your", "yours", "yourself",
    "yourselves", "he", "him", "his", "himself", "she", "her", "hers",
    "herself", "it", "its", "itself", "we", "us", "our", "ours", "ourselves",
    "they", "them", "their", "theirs", "themselves", "who", "whom", "whose",
    "which", "what",
    # prepositions
    "of", "in", "on", "at", "to", "for", "with", "by", "from", "about", "into",
    "onto", "over", "under", "up", "down", "out", "off", "through", "during",
    "before", "after", "above", "below", "between", "among", "against", "as",
    "upon", "within", "without",
    # conjunctions
    "and", "or", "but", "nor", "so", "yet", "if", "then", "than", "because",
    "while", "although", "though", "when", "where", "whether",
    # auxiliary and linking verbs
    "am", "is", "are", "was", "were", "be", "been", "being", "have", "has",
    "had", "having", "do", "does", "did", "doing", "will", "would", "shall",
    "should", "can", "could", "may", "might", "must",
    # contractions after punctuation stripping
    "im", "ive", "youre", "dont", "doesnt", "didnt",
    "isnt", "arent", "wasnt", "werent", "cant", "wont",
    # common adverbs and particles
    "not", "very", "just", "too", "also", "only", "own", "same", "here",
    "there", "how", "why", "again", "once", "more", "most", "other",
})


def _is_word_char(char: str) -> bool:
    # Letters, numbers and combining marks (needed by many non-Latin scripts)
    return unicodedata.category(char)[0] in ('L', 'N', 'M')


def normalize_text(text: str) -> str:
    """
    Lowercase text and strip everything but letters, numbers and whitespace.

    Whitespace is collapsed to single spaces; other characters are removed
    outright, so "don't" becomes "dont".
    """
    chars = []
    for char in text.lower():
        if char.isspace():
            chars.append(' ')
        elif _is_word_char(char):
            chars.append(char)
    return ''.join(chars)


def tokenize(text: str) -> List[str]:
    """Split normalized text into non-empty tokens."""
    return normalize_text(text).split()


def is_numeric_token(token: str) -> bool:
    """True when every character of the token is a Unicode number."""
    return bool(token) and all(unicodedata.category(char)[0] == 'N' for char in token)


def build_stopword_set(words) -> FrozenSet[str]:
    """Normalize a caller supplied stopword list the same way as responses."""
    result = set()
    for word in words:
        result.update(tokenize(str(word)))
    return frozenset(result)
