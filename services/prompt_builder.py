"""
Prompt Builder Module

Builds the single instruction string sent to the text generation model.
The format rules in the prompt are the only thing enforcing the marker and
delimiter layout that services.response_parser expects.
"""

from config import settings
from utils.exceptions import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def build_prompt(source_text: str) -> str:
    """
    Build the remix prompt for the given source text.

    Args:
        source_text: The user's free-form text. Passed through unmodified.

    Returns:
        str: The complete instruction string.

    Raises:
        ValidationError: If the source text is empty or whitespace only.
    """
    if not source_text or not source_text.strip():
        raise ValidationError("Source text must not be empty")

    if len(source_text) > settings.LONG_INPUT_WARNING_LENGTH:
        logger.warning(f"Source text is {len(source_text)} characters; sending it without truncation")

    count = settings.POST_COUNT
    limit = settings.POST_CHARACTER_LIMIT
    delimiter = settings.SEGMENT_DELIMITER
    markers = ", ".join(f"[POST {n}]" for n in range(1, count + 1))

    return f"""Turn the following text into {count} short social media posts.

Requirements:
1. Write exactly {count} posts.
2. Start each post with a marker line on its own: {markers}, in that order.
3. Build each post from {settings.MIN_SEGMENTS_PER_POST}-{settings.MAX_SEGMENTS_PER_POST} complete thoughts, separated by the {delimiter} character.
4. Keep each post under {limit} characters in total, counting every thought.
5. Do not use hashtags.
6. Keep the tone conversational.
7. Never break a line right after a comma.
8. Preserve the tone of the original text.
9. Focus each post on one idea.

Format your response as:
[POST 1]
first thought {delimiter} second thought {delimiter} third thought
[POST 2]
first thought {delimiter} second thought
...and so on

Text:
{source_text}"""
