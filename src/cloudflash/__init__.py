"""cloudflash - compile, download and flash firmware through a cloud IoT API."""

from .build import (
    BinaryInfo,
    BuildIssue,
    BuildResult,
    CompileFailure,
    CompileSuccess,
    IssueKind,
    SizeReport,
    interpret_compile_response,
)
from .cloud import CloudClient, Product, SourceFile, StaticTokenProvider, TokenProvider
from .config import CloudConfig
from .errors import (
    AuthError,
    CloudError,
    ConfigError,
    DownloadError,
    FlashError,
    InvalidTokenError,
    MalformedResponseError,
    MissingCredentialsError,
    ProtocolMismatchError,
    ResponseError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "CloudClient",
    "CloudConfig",
    "TokenProvider",
    "StaticTokenProvider",
    "Product",
    "SourceFile",
    "SizeReport",
    "BuildIssue",
    "IssueKind",
    "BinaryInfo",
    "BuildResult",
    "CompileSuccess",
    "CompileFailure",
    "interpret_compile_response",
    "CloudError",
    "AuthError",
    "MissingCredentialsError",
    "InvalidTokenError",
    "TransportError",
    "ResponseError",
    "MalformedResponseError",
    "ProtocolMismatchError",
    "DownloadError",
    "FlashError",
    "ConfigError",
]
