"""
multipart/form-data encoding for compile and flash requests.

Bodies are assembled fully in memory. Each part ends with CRLF and the body
ends with the closing boundary line without a trailing CRLF:

    --B\\r\\n
    Content-Disposition: form-data; name="product_id"\\r\\n
    \\r\\n
    6\\r\\n
    --B--
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

CRLF = b"\r\n"


@dataclass(frozen=True)
class SourceFile:
    """A source file submitted for compilation.

    Attributes:
        name: File name sent to the server; may include relative
            directories, e.g. ``lib/sensor/sensor.h``
        contents: File contents, UTF-8 encoded
    """

    name: str
    contents: bytes

    @classmethod
    def from_path(cls, path: Path, name: Optional[str] = None) -> "SourceFile":
        """Read a source file from disk.

        Args:
            path: File to read
            name: Name to submit (default: the file's own name)
        """
        path = Path(path)
        return cls(name=name or path.name, contents=path.read_bytes())


@dataclass(frozen=True)
class MultipartBody:
    """An encoded multipart/form-data body."""

    body: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content_length(self) -> int:
        return len(self.body)

    def headers(self) -> Dict[str, str]:
        """Headers describing this body."""
        return {
            "Content-Type": self.content_type,
            "Content-Length": str(self.content_length),
        }


def _quote(value: str) -> str:
    # Quoted-string values in Content-Disposition cannot carry raw quotes or line breaks
    return value.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


class MultipartBuilder:
    """Builds a multipart/form-data body from fields and file parts.

    Parts are written in the order they are added.
    """

    def __init__(self, boundary: Optional[str] = None):
        """
        Args:
            boundary: Boundary token (default: a random UUID)
        """
        self.boundary = boundary or str(uuid.uuid4())
        self.skipped: List[str] = []
        self._parts: List[bytes] = []

    def _disposition(self, name: str, filename: Optional[str] = None) -> bytes:
        line = f'Content-Disposition: form-data; name="{_quote(name)}"'
        if filename is not None:
            line += f'; filename="{_quote(filename)}"'
        return line.encode("utf-8")

    def _add_part(self, headers: List[bytes], payload: bytes) -> None:
        part = b"--" + self.boundary.encode("ascii") + CRLF
        for header in headers:
            part += header + CRLF
        part += CRLF + payload + CRLF
        self._parts.append(part)

    def add_field(self, name: str, value: Union[str, int]) -> "MultipartBuilder":
        """Add a plain form field."""
        self._add_part([self._disposition(name)], str(value).encode("utf-8"))
        return self

    def add_file(self, name: str, filename: str, contents: bytes) -> "MultipartBuilder":
        """Add a text file part.

        Contents that are not valid UTF-8 are left out and the filename is
        recorded in ``skipped``.
        """
        try:
            contents.decode("utf-8")
        except UnicodeDecodeError:
            logging.warning(f"Skipping {filename}: contents are not valid UTF-8")
            self.skipped.append(filename)
            return self

        self._add_part([self._disposition(name, filename)], contents)
        return self

    def add_binary_file(self, name: str, filename: str, contents: bytes) -> "MultipartBuilder":
        """Add a raw binary file part."""
        self._add_part(
            [self._disposition(name, filename), b"Content-Transfer-Encoding: binary"],
            contents,
        )
        return self

    def build(self) -> MultipartBody:
        """Encode all parts added so far."""
        body = b"".join(self._parts) + b"--" + self.boundary.encode("ascii") + b"--"
        return MultipartBody(body=body, boundary=self.boundary)


def compile_form(
    product_id: int,
    files: Iterable[SourceFile],
    build_target_version: Optional[str] = None,
    boundary: Optional[str] = None,
) -> MultipartBody:
    """Encode a compile request.

    Files are sent as ``file1``, ``file2``, ... by position; a file whose
    contents are not UTF-8 is left out and its number is not reused.

    Args:
        product_id: Numeric product (platform) id to build for
        files: Sources to compile
        build_target_version: Firmware version to build against (default: latest)
        boundary: Boundary token (default: random)
    """
    builder = MultipartBuilder(boundary)
    builder.add_field("product_id", product_id)
    if build_target_version is not None:
        builder.add_field("build_target_version", build_target_version)

    for index, source in enumerate(files, start=1):
        builder.add_file(f"file{index}", source.name, source.contents)

    return builder.build()


def flash_form(firmware: bytes, boundary: Optional[str] = None) -> MultipartBody:
    """Encode a flash request carrying a firmware binary."""
    builder = MultipartBuilder(boundary)
    builder.add_field("file_type", "binary")
    builder.add_binary_file("file", "firmware.bin", firmware)
    return builder.build()
