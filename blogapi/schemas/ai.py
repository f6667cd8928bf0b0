from pydantic import BaseModel, Field


class SuggestionRequest(BaseModel):
    prompt: str = Field(
        default="",
        max_length=2000,
        description="Topic or instruction for the generated blog",
        examples=["Why type hints make Python refactors safer"],
    )


class GeneratedText(BaseModel):
    """Structured output requested from the model."""

    text: str = Field(..., description="Blog text, paragraphs separated by blank lines")


class GeneratedBlog(BaseModel):
    title: str
    paragraphs: list[str]
    paragraph_count: int


class SuggestionResponse(BaseModel):
    blog: GeneratedBlog
