import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

PROVIDERS = ("gemini", "openai")


class MissingSettingError(RuntimeError):
    """Raised at startup when the environment cannot produce a usable Settings."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    hubspot_access_token: str
    insight_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash-lite"
    openai_model: str = "gpt-4.1-mini"
    hubspot_api_base: str = "https://api.hubapi.com"
    upstream_timeout: Optional[float] = 30.0
    log_level: str = "INFO"
    port: int = 3001

    @property
    def model_api_key(self) -> str:
        if self.insight_provider == "openai":
            return self.openai_api_key or ""
        return self.gemini_api_key or ""

    @property
    def model_name(self) -> str:
        if self.insight_provider == "openai":
            return self.openai_model
        return self.gemini_model


def _require(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise MissingSettingError(f"{name} is not set. Add it to the environment or the .env file.")
    return value


def _timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return 30.0
    try:
        seconds = float(raw)
    except ValueError:
        raise MissingSettingError(f"UPSTREAM_TIMEOUT_SECONDS must be a number, got {raw!r}")
    # 0 disables the timeout
    return seconds if seconds > 0 else None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    token = _require(env, "HUBSPOT_ACCESS_TOKEN")

    provider = (env.get("INSIGHT_PROVIDER") or "gemini").strip().lower()
    if provider not in PROVIDERS:
        raise MissingSettingError(
            f"INSIGHT_PROVIDER must be one of {', '.join(PROVIDERS)}, got {provider!r}"
        )
    key_name = "OPENAI_API_KEY" if provider == "openai" else "GEMINI_API_KEY"
    model_key = _require(env, key_name)

    port = env.get("PORT") or "3001"
    if not port.isdigit():
        raise MissingSettingError(f"PORT must be an integer, got {port!r}")

    return Settings(
        hubspot_access_token=token,
        insight_provider=provider,
        gemini_api_key=model_key if provider == "gemini" else env.get("GEMINI_API_KEY"),
        openai_api_key=model_key if provider == "openai" else env.get("OPENAI_API_KEY"),
        gemini_model=env.get("GEMINI_MODEL") or "gemini-2.5-flash-lite",
        openai_model=env.get("OPENAI_MODEL") or "gpt-4.1-mini",
        hubspot_api_base=(env.get("HUBSPOT_API_BASE") or "https://api.hubapi.com").rstrip("/"),
        upstream_timeout=_timeout(env.get("UPSTREAM_TIMEOUT_SECONDS")),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        port=int(port),
    )
