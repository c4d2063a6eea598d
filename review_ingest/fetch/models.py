"""Fetched page model."""

from pydantic import BaseModel, Field


class Page(BaseModel):
    """A fetched review page.

    Attributes:
        url: URL that was requested.
        final_url: URL after redirects.
        status_code: HTTP status of the final response.
        html: Raw page markup.
        content_text: Text of the content-bearing element.
    """

    url: str = Field(description="Requested URL")
    final_url: str = Field(description="URL after redirects")
    status_code: int = Field(description="HTTP status code")
    html: str = Field(description="Raw page markup")
    content_text: str = Field(description="Text of the content element")
