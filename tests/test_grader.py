import pytest

from studyflow.services.grader import keyword_overlap_grader, keywords


def test_keywords_skip_short_words():
    assert keywords("A set is an unordered Collection") == ["unordered", "collection"]


@pytest.mark.parametrize(
    "user_answer, correct_answer, expected",
    [
        ("functions that yield values", "A function that yields values lazily", True),
        ("something unrelated entirely", "A function that yields values lazily", False),
        ("GLOBAL lock", "A global interpreter lock", True),
        ("", "A global interpreter lock", False),
        ("   global", "A global interpreter lock", False),
        ("anything", "a b c", True),
    ],
)
def test_keyword_overlap_grader(user_answer, correct_answer, expected):
    assert keyword_overlap_grader(user_answer, correct_answer) is expected
