from typing import Callable

Grader = Callable[[str, str], bool]

KEYWORD_MIN_LENGTH = 4
REQUIRED_MATCH_RATIO = 0.5


def normalize_text(text: str) -> str:
    text = text.strip().lower()
    return text


def keywords(text: str) -> list[str]:
    return [w for w in normalize_text(text).split() if len(w) >= KEYWORD_MIN_LENGTH]


def keyword_overlap_grader(user_answer: str, correct_answer: str) -> bool:
    """
    Heuristic grading for free-text exam answers.

    A key word (longer than 3 characters) of the correct answer matches when
    it contains, or is contained in, one of the user's words. At least half
    of the key words must match.
    """
    user_words = normalize_text(user_answer).split()
    expected = keywords(correct_answer)

    matched = [
        word
        for word in expected
        if any(user_word in word or word in user_word for user_word in user_words)
    ]
    return len(matched) >= len(expected) * REQUIRED_MATCH_RATIO
