"""Client for the cloud firmware API.

Supports compiling sources in the cloud, downloading compiled binaries and
flashing firmware to devices over the air.

Usage:
    client = CloudClient(StaticTokenProvider(token))
    result = client.compile([SourceFile("app.ino", source)], Product.PHOTON)
    if result.success:
        firmware = client.download_binary(result.binary)
        client.flash(device_id, firmware)
    else:
        for issue in result.issues:
            print(issue)
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..build.compile_result import BinaryInfo, BuildResult, interpret_compile_response
from ..errors import DownloadError, FlashError, InvalidTokenError
from .auth import TokenProvider
from .multipart import SourceFile, compile_form, flash_form
from .products import Product
from .transport import HttpRequest, HttpResponse, RequestsTransport, Transport

DEFAULT_API_URL = "https://api.particle.io"


class CloudClient:
    """Client for the cloud firmware API.

    Authentication and transport failures propagate to the caller unchanged
    and are never retried here.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        transport: Optional[Transport] = None,
        api_url: str = DEFAULT_API_URL,
    ):
        """Initialize client.

        Args:
            token_provider: Source of bearer tokens
            transport: HTTP transport (default: RequestsTransport)
            api_url: Base URL of the cloud API
        """
        self.token_provider = token_provider
        self.transport = transport or RequestsTransport()
        self.api_url = api_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
        show_progress: bool = False,
    ) -> HttpResponse:
        access_token = self.token_provider.get_access_token()

        request = HttpRequest(
            method=method,
            url=self._url(path),
            headers={"Authorization": f"Bearer {access_token}", **(headers or {})},
            body=body,
            show_progress=show_progress,
        )
        response = self.transport.send(request)
        self._check_for_invalid_token(request, response)
        return response

    @staticmethod
    def _check_for_invalid_token(request: HttpRequest, response: HttpResponse) -> None:
        """Raise InvalidTokenError if the server rejected the token."""
        rejected = response.status_code == 401
        if not rejected and response.status_code >= 400:
            try:
                payload = json.loads(response.body)
            except ValueError:
                payload = None
            rejected = isinstance(payload, dict) and payload.get("error") == "invalid_token"

        if rejected:
            logging.warning(f"{request.method} {request.url} rejected the access token")
            raise InvalidTokenError(f"The access token was rejected by {request.url}")

    def compile(
        self,
        files: Iterable[SourceFile],
        product: Union[Product, str, int],
        build_target_version: Optional[str] = None,
    ) -> BuildResult:
        """Compile source files in the cloud.

        A returned CompileFailure means the sources did not compile; it is
        not an error.

        Args:
            files: Sources to compile
            product: Platform to build for
            build_target_version: Firmware version to build against (default: latest)

        Returns:
            CompileSuccess or CompileFailure

        Raises:
            AuthError: If no token is available or the token was rejected
            TransportError: If the request could not be completed
            ResponseError: If the response does not follow the compile schema
        """
        files = list(files)
        product = Product.from_value(product)
        form = compile_form(product.value, files, build_target_version)

        logging.info(f"Compiling {len(files)} file(s) for {product.display_name}")
        response = self._send("POST", "v1/binaries", headers=form.headers(), body=form.body)
        return interpret_compile_response(response.body)

    def download_binary(
        self,
        binary: Union[BinaryInfo, str],
        dest_path: Optional[Path] = None,
        show_progress: bool = False,
    ) -> bytes:
        """Download a compiled binary.

        Args:
            binary: Binary description from a successful compile, or its id
            dest_path: Optional file to write the binary to
            show_progress: Whether to show a progress bar

        Returns:
            Binary contents

        Raises:
            DownloadError: If the server does not return the binary
        """
        binary_id = binary.binary_id if isinstance(binary, BinaryInfo) else binary

        logging.info(f"Downloading binary {binary_id}")
        response = self._send("GET", f"v1/binaries/{binary_id}", show_progress=show_progress)
        if response.status_code != 200:
            logging.warning(f"Failed to download binary {binary_id}: HTTP {response.status_code}")
            raise DownloadError(
                f"Failed to download binary {binary_id}: HTTP {response.status_code} {response.text}"
            )

        if dest_path is not None:
            self._write_file(Path(dest_path), response.body)

        return response.body

    @staticmethod
    def _write_file(dest_path: Path, data: bytes) -> None:
        dest_path.parent.mkdir(parents=True, exist_ok=True)

        # Use temporary file during write
        temp_file = dest_path.with_suffix(dest_path.suffix + ".tmp")
        try:
            temp_file.write_bytes(data)
            temp_file.replace(dest_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise DownloadError(f"Failed to write {dest_path}: {e}") from e

    def flash(self, device_id: str, firmware: bytes) -> str:
        """Send firmware to a device over the air.

        This only starts the update; the device applies it asynchronously.

        Args:
            device_id: Device to flash
            firmware: Firmware binary

        Returns:
            Server status message, e.g. "Update started"

        Raises:
            FlashError: If the server does not accept the firmware
        """
        form = flash_form(firmware)

        logging.info(f"Flashing device {device_id} with {len(firmware)} bytes")
        response = self._send("PUT", f"v1/devices/{device_id}", headers=form.headers(), body=form.body)

        try:
            payload = json.loads(response.body)
        except ValueError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get("status"), str):
            return payload["status"]

        logging.warning(f"Failed to flash device {device_id}: HTTP {response.status_code}")
        raise FlashError(f"Failed to flash device {device_id}: {response.text}")
