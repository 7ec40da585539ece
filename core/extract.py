"""
Video Reference Normalization

Single responsibility: user-supplied video reference → bare YouTube video ID.
Accepts a bare ID, a youtube.com watch URL or a youtu.be short link.
"""

from typing import Optional
from urllib.parse import urlsplit, parse_qs

import structlog
from pydantic import BaseModel, model_validator

from core.result import ConversionErrorKind

logger = structlog.get_logger(__name__)


class ExtractedVideoId(BaseModel):
    """Either a video ID or the reason one could not be extracted"""

    video_id: Optional[str] = None
    error: Optional[ConversionErrorKind] = None

    @model_validator(mode='after')
    def check_exactly_one(self):
        if (self.video_id is None) == (self.error is None):
            raise ValueError("Exactly one of video_id or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_video_id(video_reference: str) -> ExtractedVideoId:
    """Extract the video ID from a bare ID, youtube.com URL or youtu.be URL"""

    if 'youtube.com' in video_reference or 'youtu.be' in video_reference:
        try:
            parsed_url = urlsplit(video_reference)
            # Port is only validated on access
            parsed_url.port
        except ValueError as e:
            logger.warning("URL parsing error", reference=video_reference, error=str(e))
            return ExtractedVideoId(error=ConversionErrorKind.MALFORMED_URL)

        # Only absolute URLs are accepted, "youtube.com/watch?v=..." is not
        if not parsed_url.scheme or not parsed_url.netloc:
            logger.warning("URL is not absolute", reference=video_reference)
            return ExtractedVideoId(error=ConversionErrorKind.MALFORMED_URL)

        if 'youtube.com' in video_reference:
            video_id = parse_qs(parsed_url.query).get('v', [None])[0]
        else:
            # Everything after the leading slash, including further segments
            video_id = parsed_url.path[1:]
    else:
        video_id = video_reference

    if not video_id:
        logger.warning("Could not extract video ID", reference=video_reference)
        return ExtractedVideoId(error=ConversionErrorKind.EXTRACTION_FAILURE)

    return ExtractedVideoId(video_id=video_id)
