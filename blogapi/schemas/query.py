"""
Filter and search request/response shapes.

``FilterParams`` and ``SearchParams`` carry already-parsed query values;
semantic checks (date order, sort names, sign of the paging values) live in
the query service so that every caller gets the same messages.
"""

from datetime import date

from pydantic import BaseModel, Field

from blogapi.schemas.blog import BlogResponse


class FilterParams(BaseModel):
    tags: list[str] = Field(default=[], description="OR-matched tags")
    date_from: date | None = Field(default=None, description="Inclusive lower bound")
    date_to: date | None = Field(default=None, description="Inclusive upper bound (whole day)")
    popularity_sort: str | None = Field(
        default=None,
        description="views, likes, dislikes or engagement",
    )
    sort_order: str | None = Field(default=None, description="asc or desc")
    limit: int = Field(default=0, description="0 means the default page size")
    skip: int = 0


class SearchParams(BaseModel):
    title: str | None = None
    author: str | None = None
    limit: int = Field(default=0, description="0 means the default page size")
    skip: int = 0


class FilterResponse(BaseModel):
    blogs: list[BlogResponse]
    count: int
    total_count: int
    page: int
    limit: int


class BlogWithAuthor(BlogResponse):
    author_name: str


class SearchQuery(BaseModel):
    """Echo of the normalised search inputs."""

    title: str | None = None
    author: str | None = None
    limit: int
    skip: int


class SearchResponse(BaseModel):
    blogs: list[BlogWithAuthor]
    count: int
    total_count: int
    query: SearchQuery


class FilterEnvelope(BaseModel):
    message: str = "Blogs filtered successfully"
    data: FilterResponse


class SearchEnvelope(BaseModel):
    message: str = "Blog search completed successfully"
    data: SearchResponse
