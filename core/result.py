"""
Conversion Result Model

The uniform success/failure outcome produced for every conversion request,
plus the taxonomy of failures and the messages shown to the user.
"""

from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field


class ConversionErrorKind(str, Enum):
    """Every way a conversion request can fail"""

    CONFIGURATION_MISSING = "configuration_missing"
    EMPTY_INPUT = "empty_input"
    MALFORMED_URL = "malformed_url"
    EXTRACTION_FAILURE = "extraction_failure"
    TRANSPORT_FAILURE = "transport_failure"
    UPSTREAM_HTTP_ERROR = "upstream_http_error"
    UPSTREAM_FAILURE = "upstream_failure"
    UNEXPECTED = "unexpected"


ERROR_MESSAGES: Dict[ConversionErrorKind, str] = {
    ConversionErrorKind.CONFIGURATION_MISSING: "API configuration error. Please contact the administrator.",
    ConversionErrorKind.EMPTY_INPUT: "Please enter a valid video reference",
    ConversionErrorKind.MALFORMED_URL: "Invalid URL format",
    ConversionErrorKind.EXTRACTION_FAILURE: "Could not extract video ID",
    ConversionErrorKind.TRANSPORT_FAILURE: "Error contacting the conversion service. Please try again later.",
    ConversionErrorKind.UPSTREAM_FAILURE: "Failed to convert video. Please check the ID and try again.",
    ConversionErrorKind.UNEXPECTED: "An error occurred while processing your request. Please try again later.",
}


class ConversionResult(BaseModel):
    """Outcome of a single conversion request"""

    success: bool = Field(description="Whether the upstream produced a download link")
    song_title: Optional[str] = None
    song_link: Optional[str] = None
    error_message: Optional[str] = None
    error_kind: Optional[ConversionErrorKind] = None

    @classmethod
    def succeeded(cls, title: Optional[str], link: str) -> "ConversionResult":
        return cls(success=True, song_title=title or "", song_link=link)

    @classmethod
    def failed(cls, kind: ConversionErrorKind, message: Optional[str] = None) -> "ConversionResult":
        """Build a failure, falling back to the stock message for the kind"""
        return cls(
            success=False,
            error_kind=kind,
            error_message=message or ERROR_MESSAGES[kind],
        )

    def to_template_context(self) -> Dict[str, Any]:
        """Variables consumed by templates/index.html"""
        if self.success:
            return {
                'success': True,
                'song_title': self.song_title,
                'song_link': self.song_link,
            }
        return {
            'success': False,
            'error_message': self.error_message,
        }
