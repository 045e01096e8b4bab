"""
Cloud API access for cloudflash.

This module provides the client for compiling firmware in the cloud,
downloading compiled binaries and flashing devices, together with the
request encoding, authentication and transport pieces it is built from.
"""

from .auth import StaticTokenProvider, TokenProvider
from .client import DEFAULT_API_URL, CloudClient
from .multipart import MultipartBody, MultipartBuilder, SourceFile, compile_form, flash_form
from .products import Product
from .transport import HttpRequest, HttpResponse, RequestsTransport, Transport

__all__ = [
    "CloudClient",
    "DEFAULT_API_URL",
    "TokenProvider",
    "StaticTokenProvider",
    "SourceFile",
    "MultipartBody",
    "MultipartBuilder",
    "compile_form",
    "flash_form",
    "Product",
    "Transport",
    "RequestsTransport",
    "HttpRequest",
    "HttpResponse",
]
