"""
HTTP client for the remote detection service.
"""
from __future__ import annotations
import logging
from typing import List

import httpx
from pydantic import ValidationError

from core.errors import DetectionRequestError
from core.models import Detection, DetectRequest, DetectResponse

logger = logging.getLogger(__name__)


class DetectionClient:
    def __init__(self, url: str = "http://localhost:8000/detect-mask/", timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = max(float(timeout), 0.1)

    @property
    def url(self) -> str:
        return self._url

    def detect(self, data_uri: str) -> List[Detection]:
        """
        POST {"image": data_uri} and return the labeled regions from the response.

        Raises:
            DetectionRequestError: transport failure, non-2xx status or a payload
                that does not match {"results": [{"label", "box"}]}.
        """
        body = DetectRequest(image=data_uri).model_dump()
        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(self._url, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DetectionRequestError(
                f"Detection service returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise DetectionRequestError(f"Error sending frame to {self._url}: {e}") from e

        try:
            parsed = DetectResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DetectionRequestError(f"Malformed detection response: {e}") from e

        logger.debug(f"[client] {self._url} -> {len(parsed.results)} result(s)")
        return parsed.results
