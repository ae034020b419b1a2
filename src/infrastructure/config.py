"""
Process configuration, read from environment variables.

The FastAPI composition root calls load_dotenv() first, so a local .env file
feeds the same variables during development. Values are read once into a
frozen Settings object and passed down explicitly; nothing below the
entrypoints reads os.environ.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

QUOTE_PROVIDERS = ("yahoo_chart", "yfinance")


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    quote_provider: str = "yahoo_chart"
    firecrawl_api_key: Optional[str] = None
    bedrock_model_id: Optional[str] = None
    aws_region: str = "us-east-1"
    secrets_arn: Optional[str] = None
    langfuse_enabled: bool = False
    ownership_timeout_seconds: float = 15.0
    intelligence_timeout_seconds: float = 30.0
    poll_interval_seconds: float = 60.0
    poll_max_retries: int = 1
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] = os.environ) -> "Settings":
        """Build Settings from *env*.

        Raises:
            ValueError: on an unknown QUOTE_PROVIDER or a non-numeric number.
        """
        provider = env.get("QUOTE_PROVIDER", "yahoo_chart").strip().lower()
        if provider not in QUOTE_PROVIDERS:
            raise ValueError(
                f"QUOTE_PROVIDER must be one of {', '.join(QUOTE_PROVIDERS)}, got {provider!r}"
            )
        return cls(
            quote_provider=provider,
            firecrawl_api_key=env.get("FIRECRAWL_API_KEY") or None,
            bedrock_model_id=env.get("BEDROCK_MODEL_ID") or None,
            aws_region=env.get("AWS_DEFAULT_REGION", "us-east-1"),
            secrets_arn=env.get("SECRETS_ARN") or None,
            langfuse_enabled=bool(env.get("LANGFUSE_SECRET_KEY")),
            ownership_timeout_seconds=_float(env, "OWNERSHIP_TIMEOUT_SECONDS", 15.0),
            intelligence_timeout_seconds=_float(env, "INTELLIGENCE_TIMEOUT_SECONDS", 30.0),
            poll_interval_seconds=_float(env, "POLL_INTERVAL_SECONDS", 60.0),
            poll_max_retries=int(_float(env, "POLL_MAX_RETRIES", 1)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
