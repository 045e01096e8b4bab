"""HTTP transport for cloud API requests.

Requests are described by HttpRequest and answered by HttpResponse so that
the client can be exercised without a network. RequestsTransport is the
default implementation.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from tqdm import tqdm

from ..errors import TransportError


@dataclass
class HttpRequest:
    """An outgoing HTTP request."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    show_progress: bool = False


@dataclass
class HttpResponse:
    """A completed HTTP response."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(ABC):
    """Interface for sending HTTP requests."""

    @abstractmethod
    def send(self, request: HttpRequest) -> HttpResponse:
        """Send a request and return the response, whatever its status.

        Raises:
            TransportError: If no response was received
        """
        pass


class RequestsTransport(Transport):
    """Sends requests with a requests.Session."""

    def __init__(
        self,
        timeout: float = 30,
        chunk_size: int = 8192,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            timeout: Connect/read timeout in seconds
            chunk_size: Size of chunks when reading response bodies
            session: Session to use (default: a new session)
        """
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()

    def send(self, request: HttpRequest) -> HttpResponse:
        logging.debug(f"{request.method} {request.url} ({len(request.body or b'')} byte body)")

        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                stream=True,
                timeout=self.timeout,
            )
            try:
                body = self._read_body(response, request.show_progress)
            finally:
                response.close()
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        logging.debug(f"{request.method} {request.url} -> {response.status_code} ({len(body)} bytes)")
        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=body,
        )

    def _read_body(self, response: requests.Response, show_progress: bool) -> bytes:
        total_size = int(response.headers.get("content-length", 0) or 0)

        progress_bar = None
        if show_progress and total_size > 0:
            progress_bar = tqdm(
                total=total_size,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                desc="Downloading",
            )

        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if chunk:
                    chunks.append(chunk)
                    if progress_bar:
                        progress_bar.update(len(chunk))
        finally:
            if progress_bar:
                progress_bar.close()

        return b"".join(chunks)
