"""Client configuration, loaded from ~/.config/signalpost/ and the environment."""

from __future__ import annotations

import os
import tomllib
import uuid as uuid_lib
from dataclasses import dataclass, field, fields
from pathlib import Path

from signalpost.crypto import Crypto

DEFAULT_ORIGIN = "ps.pndsn.com"
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_REQUEST_TIMEOUT = 10.0
SDK_NAME = "SignalPost-Python"

ENV_PREFIX = "SIGNALPOST_"
ENV_KEYS = ("publish_key", "subscribe_key", "auth_key", "cipher_key", "uuid", "origin")


def sdk_full_name() -> str:
    from signalpost import __version__
    return f"{SDK_NAME}/{__version__}"


def _default_uuid() -> str:
    return f"pn-{uuid_lib.uuid4()}"


@dataclass(frozen=True)
class Timeouts:
    """Per-request timeouts in seconds, handed to the transport as-is."""

    connect: float = DEFAULT_CONNECT_TIMEOUT
    request: float = DEFAULT_REQUEST_TIMEOUT


@dataclass
class Configuration:
    publish_key: str | None = None
    subscribe_key: str | None = None
    auth_key: str | None = None
    uuid: str = field(default_factory=_default_uuid)
    cipher_key: str | None = None
    use_random_iv: bool = True
    crypto: Crypto | None = None
    origin: str = DEFAULT_ORIGIN
    ssl: bool = True
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    non_subscribe_request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def demo_keys(cls) -> Configuration:
        return cls(publish_key="demo", subscribe_key="demo", uuid="demo-uuid")

    def is_encryption_enabled(self) -> bool:
        return self.crypto is not None or bool(self.cipher_key)

    def get_crypto(self) -> Crypto | None:
        """Explicit crypto handle first, else one built from cipher_key."""
        if self.crypto is not None:
            return self.crypto
        if self.cipher_key:
            return Crypto(self.cipher_key, use_random_iv=self.use_random_iv)
        return None

    def timeouts(self) -> Timeouts:
        return Timeouts(
            connect=self.connect_timeout,
            request=self.non_subscribe_request_timeout,
        )

    def base_url(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.origin}"


def get_config_dir() -> Path:
    d = Path.home() / ".config" / "signalpost"
    d.mkdir(parents=True, exist_ok=True)
    return d


def config_path() -> Path:
    return get_config_dir() / "config.toml"


def load_settings() -> dict:
    """Merge config.toml with SIGNALPOST_* environment variables (file wins)."""
    settings: dict = {}
    p = config_path()
    if p.exists():
        settings.update(tomllib.loads(p.read_text()))
    for key in ENV_KEYS:
        if settings.get(key):
            continue
        value = os.environ.get(ENV_PREFIX + key.upper())
        if value:
            settings[key] = value
    return settings


def load_configuration(**overrides) -> Configuration:
    """Build a Configuration from config.toml, the environment and overrides."""
    settings = load_settings()
    settings.update({k: v for k, v in overrides.items() if v is not None})
    known = {f.name for f in fields(Configuration)}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ValueError(f"unknown configuration keys: {', '.join(unknown)}")
    return Configuration(**settings)
