"""
Tests for the Response Parser

Tests cover marker detection, line accumulation, segment splitting,
remaining-character counts, and the tagged parse result.
"""

import logging

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.response_parser import (
    Post, Parsed, Unparseable, parse_posts, parse_response, MARKER_PATTERN
)


class TestParsePosts:
    """Tests for parse_posts."""

    def test_five_blocks_produce_five_posts_in_order(self, sample_model_response):
        """Five well-formed blocks yield five posts with trimmed segments."""
        posts = parse_posts(sample_model_response)

        assert len(posts) == 5
        assert posts[0].segments == ["Coffee is a ritual", "Not just a drink"]
        assert posts[1].segments == ["Mornings start slow", "Then the first sip hits", "Everything clicks"]
        assert posts[4].segments == ["Cold brew in winter", "Do not judge me"]

    def test_no_markers_gives_empty_list(self):
        """Text without markers produces no posts."""
        assert parse_posts("Just some text | with a pipe\nand another line") == []

    @pytest.mark.parametrize("raw", ["", "   ", "\n\n\t\n", None])
    def test_empty_input_gives_empty_list(self, raw):
        assert parse_posts(raw) == []

    def test_block_without_delimiter_is_single_segment(self):
        """A body with no | becomes one segment equal to the trimmed body."""
        posts = parse_posts("[POST 1]\n   One single thought here   \n")

        assert len(posts) == 1
        assert posts[0].segments == ["One single thought here"]

    def test_lines_concatenate_without_separator(self):
        """Content lines under one marker are joined with nothing in between."""
        posts = parse_posts("[POST 1]\nHello \nworld\n")

        assert posts[0].body == "Helloworld"
        assert posts[0].segments == ["Helloworld"]

    def test_delimiters_across_lines(self):
        posts = parse_posts("[POST 1]\nFirst thought |\n second thought\n")

        assert posts[0].body == "First thought |second thought"
        assert posts[0].segments == ["First thought", "second thought"]

    def test_lines_before_first_marker_are_discarded(self):
        posts = parse_posts("Sure! Here you go.\n\n[POST 1]\nA | B\n")

        assert len(posts) == 1
        assert posts[0].body == "A | B"

    def test_blank_lines_inside_block_are_ignored(self):
        posts = parse_posts("[POST 1]\n\nA\n\n| B\n")

        assert posts[0].body == "A| B"

    def test_marker_with_surrounding_whitespace(self):
        posts = parse_posts("   [POST 1]   \nA | B\n")
        assert len(posts) == 1

    def test_empty_block_produces_post_with_empty_body(self):
        posts = parse_posts("[POST 1]\n[POST 2]\nA | B\n")

        assert len(posts) == 2
        assert posts[0].body == ""
        assert posts[0].segments == [""]

    def test_missing_marker_merges_into_previous_post(self):
        """A block whose marker is missing produces no post of its own."""
        raw = "[POST 1]\nA | B\nC | D\n[POST 3]\nE | F\n"
        posts = parse_posts(raw)

        assert len(posts) == 2
        assert posts[0].body == "A | BC | D"


class TestMarkerPattern:
    """Tests for the marker pattern."""

    @pytest.mark.parametrize("line", ["[POST 1]", "[POST 5]", "[POST 9]", "[POST 0]"])
    def test_matches_single_digit_markers(self, line):
        assert MARKER_PATTERN.match(line)

    @pytest.mark.parametrize("line", ["[POST 10]", "POST 1", "[post 1]", "[POST 1] extra", "[POST]"])
    def test_rejects_other_lines(self, line):
        assert not MARKER_PATTERN.match(line)


class TestPost:
    """Tests for the Post record."""

    def test_remaining_chars_is_limit_minus_body_length(self):
        post = Post.from_body("x" * 100)
        assert post.remaining_chars == 180

    def test_remaining_chars_uses_raw_body_not_segments(self):
        """Whitespace around delimiters counts against the limit."""
        post = Post.from_body("a  |  b")

        assert post.segments == ["a", "b"]
        assert post.remaining_chars == 280 - 7

    def test_remaining_chars_goes_negative(self):
        post = Post.from_body("y" * 300)
        assert post.remaining_chars == -20

    def test_content_joins_segments_with_delimiter(self):
        post = Post.from_body("First  |  Second")

        assert post.content == "First|Second"
        assert post.text == "First  |  Second"


class TestParseResponse:
    """Tests for the tagged parse result."""

    def test_parsed_result(self, sample_model_response):
        result = parse_response(sample_model_response)

        assert isinstance(result, Parsed)
        assert len(result.posts) == 5
        assert result.discarded_lines == ["Here are your posts:"]

    def test_unparseable_result_keeps_raw_text(self):
        raw = "I could not do that."
        result = parse_response(raw)

        assert isinstance(result, Unparseable)
        assert result.raw_text == raw

    def test_empty_text_is_unparseable(self):
        result = parse_response("")

        assert isinstance(result, Unparseable)
        assert result.raw_text == ""

    def test_partial_result_is_kept_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = parse_response("[POST 1]\nA | B\n[POST 2]\nC | D\n")

        assert isinstance(result, Parsed)
        assert len(result.posts) == 2
        assert any("Expected 5 posts, parsed 2" in r.getMessage() for r in caplog.records)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
