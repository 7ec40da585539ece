"""
Conversion Request Module

Single responsibility: video reference → ConversionResult
Normalizes the reference, makes one call to the RapidAPI MP3 conversion
service and maps whatever comes back (or fails) into a ConversionResult.
"""

from typing import Optional, Dict, Any

import requests
import structlog
from pydantic import BaseModel, Field

from core.extract import extract_video_id
from core.result import ConversionResult, ConversionErrorKind

logger = structlog.get_logger(__name__)

DEFAULT_ENDPOINT_PATH = "/dl"


class ApiCredentials(BaseModel):
    """RapidAPI key and host for the conversion service"""

    api_key: str = Field(description="RapidAPI key")
    api_host: str = Field(description="RapidAPI host, e.g. youtube-mp36.p.rapidapi.com")

    def is_complete(self) -> bool:
        return bool(self.api_key) and bool(self.api_host)

    def headers(self) -> Dict[str, str]:
        return {
            'x-rapidapi-host': self.api_host,
            'x-rapidapi-key': self.api_key,
        }


class ConversionError(Exception):
    """Custom exception for conversion service failures"""
    pass


class NetworkError(ConversionError):
    """Transport-level failures and unreadable responses"""
    pass


class UpstreamHTTPError(ConversionError):
    """The conversion service answered with a non-success status"""

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"API error: {status_code} {reason}".strip())
        self.status_code = status_code
        self.reason = reason


def request_conversion(
    video_id: str,
    credentials: ApiCredentials,
    session=None,
    endpoint_path: str = DEFAULT_ENDPOINT_PATH
) -> Dict[str, Any]:
    """Call the conversion endpoint once and return the decoded JSON body"""

    client = session if session is not None else requests
    url = f"https://{credentials.api_host}{endpoint_path}"

    logger.info("Attempting API request", video_id=video_id, url=url)

    try:
        response = client.get(url, params={'id': video_id}, headers=credentials.headers())
    except requests.RequestException as e:
        logger.error("API request error", video_id=video_id, error=str(e))
        raise NetworkError(f"Could not reach conversion service: {e}")

    if not 200 <= response.status_code < 300:
        reason = getattr(response, 'reason', '') or ''
        logger.error("API error", status=response.status_code, reason=reason)
        raise UpstreamHTTPError(response.status_code, reason)

    try:
        payload = response.json()
    except ValueError as e:
        logger.error("API response is not valid JSON", video_id=video_id, error=str(e))
        raise NetworkError(f"Invalid response from conversion service: {e}")

    logger.debug("API response", body=payload)
    return payload


def handle_conversion(
    video_reference: Optional[str],
    credentials: Optional[ApiCredentials],
    session=None,
    endpoint_path: str = DEFAULT_ENDPOINT_PATH
) -> ConversionResult:
    """Turn a video reference into a download link or a user-facing error"""

    if credentials is None or not credentials.is_complete():
        logger.error("API credentials are not configured")
        return ConversionResult.failed(ConversionErrorKind.CONFIGURATION_MISSING)

    if not video_reference:
        return ConversionResult.failed(ConversionErrorKind.EMPTY_INPUT)

    extracted = extract_video_id(video_reference)
    if not extracted.ok:
        return ConversionResult.failed(extracted.error)

    try:
        payload = request_conversion(
            extracted.video_id,
            credentials,
            session=session,
            endpoint_path=endpoint_path
        )
    except UpstreamHTTPError as e:
        return ConversionResult.failed(
            ConversionErrorKind.UPSTREAM_HTTP_ERROR,
            f"API error: {e.status_code}"
        )
    except NetworkError:
        return ConversionResult.failed(ConversionErrorKind.TRANSPORT_FAILURE)

    if not isinstance(payload, dict):
        logger.warning("Unexpected API response shape", video_id=extracted.video_id)
        return ConversionResult.failed(ConversionErrorKind.UPSTREAM_FAILURE)

    if payload.get('status') == 'ok' and payload.get('link'):
        logger.info("Conversion succeeded", video_id=extracted.video_id)
        title = payload.get('title')
        return ConversionResult.succeeded(str(title) if title else None, str(payload['link']))

    msg = payload.get('msg')
    logger.warning("Conversion failed upstream",
                   video_id=extracted.video_id,
                   status=payload.get('status'),
                   msg=msg)
    return ConversionResult.failed(ConversionErrorKind.UPSTREAM_FAILURE, str(msg) if msg else None)
