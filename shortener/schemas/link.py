"""
Link Schemas.

Pydantic schemas for the shortener's plain-text wire format.

The service answers with space-separated fields read by position:
    add, add with ID:  "<numeric_id> <string_id>"
    stats:             "<clicks> <url>"
"""

from pydantic import BaseModel, ConfigDict, Field

from shortener.core.exceptions import ProtocolViolationError


class LinkSubmission(BaseModel):
    """Form body sent when adding a link."""

    link: str = Field(
        ...,
        description="Target URL, validated by the service",
        examples=["http://example.com"],
    )


class ShortLink(BaseModel):
    """A link as created by the service."""

    numeric_id: str = Field(description="Numeric ID, kept as transmitted")
    string_id: str = Field(description="String ID")

    model_config = ConfigDict(frozen=True)

    def string_url(self, base_url: str) -> str:
        """Short address by string ID."""
        return f"{base_url}/{self.string_id}"

    def numeric_url(self, base_url: str) -> str:
        """Short address by numeric ID."""
        return f"{base_url}/.{self.numeric_id}"

    @classmethod
    def from_body(cls, body: str) -> "ShortLink":
        """Parse a "<numeric_id> <string_id>" response body."""
        fields = body.split()
        if len(fields) < 1:
            raise ProtocolViolationError("Server error: Expected NUMID", body=body)
        if len(fields) < 2:
            raise ProtocolViolationError("Server error: Expected STRID", body=body)
        return cls(numeric_id=fields[0], string_id=fields[1])


class LinkStats(BaseModel):
    """Usage statistics of a link."""

    clicks: int = Field(description="Number of times the short link was followed")
    url: str = Field(description="Destination URL")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_body(cls, body: str) -> "LinkStats":
        """Parse a "<clicks> <url>" response body. The URL is the rest of the body."""
        fields = body.strip().split(maxsplit=1)
        if len(fields) < 1:
            raise ProtocolViolationError("Server error: Expected CLICKS", body=body)
        if len(fields) < 2:
            raise ProtocolViolationError("Server error: Expected URL", body=body)
        # int() alone would also take "+7", "1_000" and non-ASCII digits
        if not (fields[0].isascii() and fields[0].isdigit()):
            raise ProtocolViolationError(
                f"Server error: CLICKS is not a number: {fields[0]!r}", body=body,
            )
        return cls(clicks=int(fields[0]), url=fields[1])
