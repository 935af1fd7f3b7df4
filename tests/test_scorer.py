"""
Tests for transcript scoring.
"""

from shadowing.scorer import compare_transcript, score_transcript


class TestScoreTranscript:

    def test_nothing_recognized(self):
        assert score_transcript("the quick fox", "") == 0

    def test_partial_match(self):
        assert score_transcript("the quick fox", "the slow fox") == 67

    def test_perfect(self):
        assert score_transcript("the quick fox", "the quick fox") == 100

    def test_empty_reference(self):
        assert score_transcript("", "anything at all") == 0

    def test_none_inputs(self):
        assert score_transcript(None, None) == 0
        assert score_transcript("the fox", None) == 0

    def test_case_insensitive(self):
        assert score_transcript("The Quick FOX", "the quick fox") == 100

    def test_order_ignored(self):
        assert score_transcript("the quick fox", "fox quick the") == 100

    def test_repeated_reference_words(self):
        # Both "the" match a single recognized "the"
        assert score_transcript("the cat the dog", "the") == 50

    def test_half_rounds_up(self):
        reference = "one two three four five six seven eight"
        assert score_transcript(reference, "one") == 13

    def test_punctuation_is_part_of_word(self):
        assert score_transcript("hello, world", "hello world") == 50


class TestComparison:

    def test_word_lists(self):
        result = compare_transcript("the quick fox", "the slow fox")
        assert result.accuracy == 67
        assert result.matched_words == ["the", "fox"]
        assert result.missed_words == ["quick"]

    def test_empty_recognized_misses_everything(self):
        result = compare_transcript("Hello there", "")
        assert result.matched_words == []
        assert result.missed_words == ["hello", "there"]
