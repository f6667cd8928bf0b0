# blogapi/services/blog_writer.py

import re
from logging import getLogger

from blogapi.clients.ai_client import AiClient
from blogapi.configs import file_logger
from blogapi.configs.settings import AI_GENERATION_ERROR
from blogapi.errors import AIGenerationError, AiError, CircuitBreakerError, ValidationError
from blogapi.schemas.ai import GeneratedBlog, GeneratedText

logger = file_logger(getLogger(__name__))

PROMPT_PREFIX = "Generate a blog regarding: "
SYSTEM_INSTRUCTION = (
    "You are a helpful blog writer. Write an engaging, well-structured blog post. "
    "Start with a one-line title, then write the body as plain paragraphs "
    "separated by a single blank line."
)

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s")


def build_prompt(prompt: str) -> str:
    """
    Normalise a user prompt for blog generation.

    Args:
        prompt: Raw prompt from the request body.

    Returns:
        The prompt, prefixed when it does not already ask for a blog.

    Raises:
        ValidationError: If the prompt is empty or blank.
    """
    prompt = prompt.strip()
    if not prompt:
        mssg = "prompt cannot be empty"
        raise ValidationError(mssg)
    if "blog" not in prompt.lower():
        prompt = PROMPT_PREFIX + prompt
    return prompt


def _clean_title(line: str) -> str:
    return line.replace("#", "").replace("*", "").strip()


def shape_blog(text: str) -> GeneratedBlog:
    """
    Split generated text into a title and paragraphs.

    Paragraphs are separated by blank lines. The title is the first line of
    the first paragraph, cut at its first sentence end, without markdown
    ``#`` and ``*`` markers.
    """
    paragraphs = [p.strip() for p in _PARAGRAPH_BREAK.split(text.strip()) if p.strip()]
    title = ""
    if paragraphs:
        first_line = paragraphs[0].splitlines()[0]
        title = _clean_title(_SENTENCE_END.split(first_line, maxsplit=1)[0])
    return GeneratedBlog(title=title, paragraphs=paragraphs, paragraph_count=len(paragraphs))


async def generate_blog(prompt: str, ai_client: AiClient) -> GeneratedBlog:
    """
    Generate a blog post from a prompt.

    Args:
        prompt: The user's topic or instruction.
        ai_client: The AI client to use for generation.

    Returns:
        The shaped blog.

    Raises:
        ValidationError: If the prompt is blank.
        AIGenerationError: If the model call fails or returns no text.
    """
    contents = build_prompt(prompt)
    try:
        result = await ai_client.do_service(
            contents=contents,
            system_instruction=SYSTEM_INSTRUCTION,
            resp_type=GeneratedText,
        )
    except (AiError, CircuitBreakerError) as e:
        logger.warning(f"Blog generation failed: {e.detail}")
        raise AIGenerationError(AI_GENERATION_ERROR) from e

    if not result.text.strip():
        raise AIGenerationError(AI_GENERATION_ERROR)
    return shape_blog(result.text)
