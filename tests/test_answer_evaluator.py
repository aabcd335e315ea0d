from interviewcoach.interview import HeuristicAnswerEvaluator
from interviewcoach.interview.answer_evaluator import BRIEF_ANSWER_FEEDBACK, NO_ANSWER_FEEDBACK, is_skipped

# 60 words, 3 of 4 keywords, exactly two positive words, no weak or filler words
SCOPE_ANSWER = (
    "Variables declared with var have function scope and are subject to hoisting, which means "
    "the declaration moves to the top of the enclosing function. Let and const have block scope "
    "instead. In my project I implemented a linter rule and designed a migration plan that "
    "replaced var across the codebase. Const prevents reassignment of the binding, while let allows it."
)
SCOPE_KEYWORDS = ["scope", "hoisting", "block", "closure"]


def test_empty_answer_gets_minimal_scores():
    result = HeuristicAnswerEvaluator().evaluate("", [])

    assert result.overall == 1
    assert result.communication_score == 1
    assert result.confidence_score == 1
    assert result.keyword_score == 0
    assert result.word_count == 0
    assert result.feedback == NO_ANSWER_FEEDBACK


def test_skip_sentinel_is_treated_as_no_answer():
    result = HeuristicAnswerEvaluator().evaluate("  (Skipped) ", ["api"])

    assert result.overall == 1
    assert result.keyword_score == 0
    assert result.word_count == 0


def test_very_short_text_is_no_answer():
    assert is_skipped("ok")
    assert is_skipped(None)
    assert not is_skipped("I use var.")


def test_brief_answer_gets_low_band():
    result = HeuristicAnswerEvaluator().evaluate("I use var for everything.", ["scope"])

    assert result.overall == 2
    assert result.keyword_score == 1
    assert result.communication_score == 2
    assert result.confidence_score == 2
    assert result.word_count == 5
    assert result.feedback == BRIEF_ANSWER_FEEDBACK


def test_keyword_and_length_scoring():
    result = HeuristicAnswerEvaluator().evaluate(SCOPE_ANSWER, SCOPE_KEYWORDS)

    assert result.word_count == 60
    assert result.matched_keywords == ["scope", "hoisting", "block"]
    assert result.keyword_score == 7.5
    # 3 + three length thresholds + two low-filler bonuses
    assert result.communication_score == 8
    # 3 + no weak words (2) + two positive words (1) + 40-word threshold (1)
    assert result.confidence_score == 7
    # 7.5*0.35 + sentiment 7*0.15 + 8*0.25 + 7*0.25 = 7.425
    assert result.overall == 7.4
    assert result.feedback.startswith("Good answer.")
    assert "Good use of: scope, hoisting, block." in result.feedback


def test_no_expected_keywords_gives_neutral_keyword_score():
    result = HeuristicAnswerEvaluator().evaluate(SCOPE_ANSWER, [])

    assert result.keyword_score == 5
    assert result.matched_keywords == []


def test_keyword_match_is_case_insensitive_substring():
    answer = "A client sends an HTTP request to a REST endpoint and receives a response back quickly."
    result = HeuristicAnswerEvaluator().evaluate(answer, ["HTTP", "rest", "Endpoint", "graphql"])

    assert result.matched_keywords == ["HTTP", "rest", "Endpoint"]
    assert result.keyword_score == 7.5


def test_filler_and_hedging_words_lower_scores():
    answer = "um so um the api is um a thing that um handles requests from the client to the server and back"
    result = HeuristicAnswerEvaluator().evaluate(answer, ["request", "client", "server"])

    assert result.word_count == 21
    assert result.communication_score == 1
    assert result.confidence_score == 1
    assert "reduce filler words" in result.feedback
    assert "more detailed responses" in result.feedback


def test_filler_words_match_whole_words_only():
    answer = (
        "The document stores the maximum number of unlikely outcomes for each album so the "
        "service can rank them without extra lookups."
    )
    result = HeuristicAnswerEvaluator().evaluate(answer, [])

    # 'um' inside 'document'/'maximum'/'album' and 'like' inside 'unlikely' do not count
    assert result.confidence_score == 5
    assert result.communication_score == 6


def test_scores_stay_within_bounds():
    evaluator = HeuristicAnswerEvaluator()
    long_answer = " ".join(["successfully implemented and delivered excellent strong results"] * 30)
    result = evaluator.evaluate(long_answer, ["results"])

    for score in (result.overall, result.communication_score, result.confidence_score, result.keyword_score):
        assert 1 <= score <= 10
    assert result.feedback.startswith("Excellent answer!")
