"""Server configuration.

ServerConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=8181, title="Petstore", export_toml=False)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    # Viewer
    title: str = "Swagger UI"
    static_dir: str | Path | None = None  # None = bundled swagger-ui distribution
    swagger_url: str | None = None  # Overrides the default "<mount>/json" document URL

    # Downloads (a disabled format is never offered, its route falls through)
    export_json: bool = True
    export_yaml: bool = True
    export_toml: bool = True

    # Caching
    conditional_requests: bool = True  # 304 for matching If-None-Match

    # Document acquisition
    allow_remote_scripts: bool = False
    username: str | None = None  # Basic auth for the upstream fetch only
    password: str | None = None
    fetch_timeout: float = 30.0
