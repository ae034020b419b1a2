"""
Infrastructure adapter: AWS Secrets Manager -> ISecretStore.

load_into_env() is called once at startup, before any adapter that reads
FIRECRAWL_API_KEY or LANGFUSE_* is constructed, so secrets are available
process-wide without ever being written to disk.
"""

import json
import logging
import os

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN or name."""
        response = self._client.get_secret_value(SecretId=secret_id)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Inject the secret's key-value pairs into os.environ.

        Values already present in the environment win unless *overwrite* is
        set, so a local .env can shadow the shared secret during development.
        """
        loaded = []
        for key, value in self.get_secret(secret_id).items():
            if overwrite or key not in os.environ:
                os.environ[key] = str(value)
                loaded.append(key)
        logger.info("Loaded %d secret values into the environment", len(loaded))
        return loaded
