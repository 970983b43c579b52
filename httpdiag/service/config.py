"""Server configuration model and JSON file loader."""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from httpdiag.service.errors import ConfigParseError, ConfigReadError

DEFAULT_PORT = 8888


class Configuration(BaseModel):
    """Immutable server settings, loaded once at startup.

    JSON keys follow the config file format: ``port``, ``servercrt`` and
    ``serverkey``. ``port`` defaults to 0 when a file omits it; only the
    no-file case falls back to :data:`DEFAULT_PORT`. An explicit ``null``
    port is also 0.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True, extra="ignore")

    port: int = 0
    tls_cert_path: str | None = Field(default=None, alias="servercrt")
    tls_key_path: str | None = Field(default=None, alias="serverkey")

    @property
    def tls_enabled(self) -> bool:
        """True when both certificate and key paths are set."""
        return bool(self.tls_cert_path) and bool(self.tls_key_path)

    @field_validator("port", mode="before")
    @classmethod
    def _null_port_is_unset(cls, value):
        return 0 if value is None else value


def load_config(path: str | None) -> Configuration:
    """Build a :class:`Configuration` from an optional JSON file path.

    Raises:
        ConfigReadError: the file cannot be read.
        ConfigParseError: the file is not a valid configuration document.
    """
    if not path:
        return Configuration(port=DEFAULT_PORT)

    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise ConfigReadError(f"unable to read config {path}: {e}") from e

    try:
        return Configuration.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigParseError(f"unable to parse config {path}: {e}") from e
