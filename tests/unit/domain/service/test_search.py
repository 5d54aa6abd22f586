"""Unit tests for thread-aware search."""

from threadlens.domain.service.search import search_comments
from threadlens.domain.service.text_matcher import TextMatcher, TokenWindowMatcher
from tests.conftest import make_comment


def _ids(comments):
    return [c.comment_id for c in comments]


class NeverMatcher(TextMatcher):
    """Disables the approximate tier."""

    def score(self, query: str, corpus: str) -> float:
        return 0.0


class TestEmptyKeyword:
    def test_empty_keyword_returns_input(self):
        comments = [make_comment("a", "x")]

        assert search_comments(comments, "") is comments

    def test_whitespace_keyword_returns_input(self):
        comments = [make_comment("a", "x")]

        assert search_comments(comments, "   ") is comments


class TestExactMatch:
    def test_case_and_accent_insensitive(self):
        comments = [
            make_comment("a", "Un CAFÉ s'il vous plaît"),
            make_comment("b", "tea please"),
        ]

        result = search_comments(comments, "cafe", NeverMatcher())

        assert _ids(result) == ["a"]

    def test_no_match_returns_empty(self):
        comments = [make_comment("a", "hello")]

        assert search_comments(comments, "zebra") == []


class TestApproximateMatch:
    def test_tolerates_single_character_deletion(self):
        comments = [
            make_comment("a", "Thanks for the clear explanation!"),
            make_comment("b", "first"),
        ]

        result = search_comments(comments, "explanatin")

        assert _ids(result) == ["a"]

    def test_short_unrelated_words_do_not_match(self):
        comments = [make_comment("a", "cat hat bat")]

        assert search_comments(comments, "dog") == []

    def test_matcher_scores_windows_of_query_width(self):
        matcher = TokenWindowMatcher()

        assert matcher.score("great video", "what a great vidéo".lower()) > 80
        assert matcher.score("abc", "abc") == 0.0  # below minimum query length


class TestThreadParentInclusion:
    def test_matching_reply_pulls_in_parent_first(self):
        # Arrange
        parent = make_comment("P", "no match")
        reply = make_comment("C", "agree", parent_id="P")

        # Act
        result = search_comments([parent, reply], "agree")

        # Assert
        assert _ids(result) == ["P", "C"]
        assert result[0].show_replies_default is True
        assert parent.show_replies_default is False  # input untouched

    def test_parent_listed_after_reply_is_moved_before_it(self):
        reply = make_comment("C", "agree", parent_id="P")
        parent = make_comment("P", "nothing here")

        result = search_comments([reply, parent], "agree")

        assert _ids(result) == ["P", "C"]

    def test_parent_matched_by_itself_and_by_two_replies_appears_once(self):
        # Arrange
        comments = [
            make_comment("P", "agree with this"),
            make_comment("C1", "agree", parent_id="P"),
            make_comment("C2", "I agree too", parent_id="P"),
            make_comment("X", "unrelated"),
        ]

        # Act
        result = search_comments(comments, "agree")

        # Assert
        assert _ids(result) == ["P", "C1", "C2"]
        assert result[0].show_replies_default is True

    def test_unrelated_results_keep_collection_order(self):
        comments = [
            make_comment("b", "agree"),
            make_comment("a", "agree"),
        ]

        assert _ids(search_comments(comments, "agree")) == ["b", "a"]

    def test_orphan_reply_is_kept_without_parent(self):
        orphan = make_comment("C", "agree", parent_id="missing")

        result = search_comments([orphan], "agree")

        assert _ids(result) == ["C"]

    def test_duplicate_records_appear_once(self):
        comment = make_comment("a", "agree")

        assert _ids(search_comments([comment, comment], "agree")) == ["a"]
