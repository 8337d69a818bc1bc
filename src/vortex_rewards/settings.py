"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import (
    Field,
    SecretStr,
    field_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    DEFAULT_BOOTSTRAP_ROOT,
    DEFAULT_LOCAL_RPC_URL,
    DEFAULT_MONGODB_DB,
    DEFAULT_MONGODB_URI,
    DEFAULT_PORCINI_RPC_URL,
    DEFAULT_ROOT_RPC_URL,
    ROOT_ASSET_ID,
    VTX_ASSET_ID,
)

load_dotenv()

SECRET_FIELDS = {"mongodb_uri"}


class Network(str, Enum):
    ROOT = "root"
    PORCINI = "porcini"
    LOCAL = "local"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


NETWORK_RPC_DEFAULTS = {
    Network.ROOT: DEFAULT_ROOT_RPC_URL,
    Network.PORCINI: DEFAULT_PORCINI_RPC_URL,
    Network.LOCAL: DEFAULT_LOCAL_RPC_URL,
}


class VortexSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with VORTEX_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- chain ---
    network: Network = Network.ROOT
    rpc_url: str | None = None
    rpc_max_concurrent_calls: int = Field(default=5, ge=1)

    # --- database ---
    mongodb_uri: SecretStr = SecretStr(DEFAULT_MONGODB_URI)
    mongodb_default_db: str = DEFAULT_MONGODB_DB
    mongodb_timeout_ms: int = Field(default=5000, gt=0)

    # --- calculation inputs ---
    bootstrap_root: Decimal = Field(default=DEFAULT_BOOTSTRAP_ROOT, ge=0)
    root_asset_id: int = ROOT_ASSET_ID
    vtx_asset_id: int = VTX_ASSET_ID

    # --- retries and timeouts ---
    adapter_retries: int = Field(default=2, ge=0)
    global_timeout_seconds: float | None = 60.0

    # --- output ---
    output_format: OutputFormat = OutputFormat.TABLE

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="VORTEX_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("mongodb_uri", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr."""
        if v is None or isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("VORTEX_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("vortex-rewards.toml")
                    user_config = (
                        Path.home() / ".config" / "vortex-rewards" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [vortex_rewards]
                body = data.get("vortex_rewards", data)
                if not isinstance(body, dict):
                    return {}

                for key in SECRET_FIELDS:
                    if key in body:
                        raise ValueError(
                            f"Security violation: '{key}' found in TOML config file. "
                            f"Secrets must only be provided via environment variables or CLI flags."
                        )

                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-friendly dict with secrets redacted."""
        data = self.model_dump(mode="json")
        data["mongodb_uri"] = "***redacted***"
        return data

    @property
    def rpc_url_resolved(self) -> str:
        """RPC endpoint, falling back to the public endpoint of the network."""
        return self.rpc_url or NETWORK_RPC_DEFAULTS[self.network]

    @property
    def using_default_rpc(self) -> bool:
        return self.rpc_url is None
