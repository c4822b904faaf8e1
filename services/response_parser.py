"""
Response Parser Module

This module converts the raw text returned by the model into Post records.
The model is asked to emit blocks introduced by a ``[POST n]`` marker line,
with the thoughts of each post separated by the segment delimiter.

Parsing rules:
- A trimmed line matching the marker pattern opens a new post.
- Every other non-blank line is trimmed and appended to the open post's body
  with no separator; lines before the first marker are discarded.
- A post's segments are its body split on the delimiter, each piece trimmed.
- Remaining characters are counted against the raw body and may go negative.
"""

import re
from dataclasses import dataclass, field
from typing import List, Union

from config import settings
from utils.logger import get_logger

logger = get_logger(__name__)

MARKER_PATTERN = re.compile(r'^\[POST \d\]$')


@dataclass
class Post:
    """A generated, unsaved candidate post."""
    body: str
    segments: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The combined display text."""
        return self.body

    @property
    def remaining_chars(self) -> int:
        return settings.POST_CHARACTER_LIMIT - len(self.body)

    @property
    def content(self) -> str:
        """Segments joined by the delimiter, as stored when the post is saved."""
        return settings.SEGMENT_DELIMITER.join(self.segments)

    @classmethod
    def from_body(cls, body: str) -> "Post":
        segments = [piece.strip() for piece in body.split(settings.SEGMENT_DELIMITER)]
        return cls(body=body, segments=segments)


@dataclass
class Parsed:
    """Model output that contained at least one post marker."""
    posts: List[Post]
    discarded_lines: List[str] = field(default_factory=list)


@dataclass
class Unparseable:
    """Model output with no post markers at all."""
    raw_text: str


ParseResult = Union[Parsed, Unparseable]


def _scan(raw_text: str):
    """Split raw text into post bodies and the lines seen before any marker."""
    bodies: List[str] = []
    discarded: List[str] = []

    for line in (raw_text or "").splitlines():
        stripped = line.strip()
        if MARKER_PATTERN.match(stripped):
            bodies.append("")
        elif stripped:
            if bodies:
                bodies[-1] += stripped
            else:
                discarded.append(stripped)

    return bodies, discarded


def parse_posts(raw_text: str) -> List[Post]:
    """
    Parse model output into an ordered list of posts.

    Args:
        raw_text: The raw model output.

    Returns:
        List[Post]: The posts in block order; empty when no marker is present.
    """
    bodies, _ = _scan(raw_text)
    return [Post.from_body(body) for body in bodies]


def parse_response(raw_text: str) -> ParseResult:
    """
    Parse model output into a tagged result.

    Args:
        raw_text: The raw model output.

    Returns:
        Parsed when at least one marker was found, otherwise Unparseable.
    """
    bodies, discarded = _scan(raw_text)

    if not bodies:
        logger.warning("No post markers found in model response")
        return Unparseable(raw_text=raw_text or "")

    if discarded:
        logger.warning(f"Discarded {len(discarded)} line(s) before the first post marker")

    if len(bodies) != settings.POST_COUNT:
        logger.warning(f"Expected {settings.POST_COUNT} posts, parsed {len(bodies)}")

    return Parsed(posts=[Post.from_body(body) for body in bodies], discarded_lines=discarded)
