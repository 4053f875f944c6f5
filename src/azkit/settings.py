"""Client settings loaded from environment variables."""

import logging

from pydantic import model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """Configuration shared by every azkit client.

    Values are read from ``AZKIT_*`` environment variables (case-insensitive)
    and optionally from a ``.env`` file in the working directory.
    """

    management_url: str = "https://management.azure.com"
    storage_api_version: str = "2021-12-02"
    documents_api_version: str = "2023-07-31"

    request_timeout: int = 30
    max_retries: int = 3
    retry_after_cap: int = 8
    polling_interval: float = 10.0

    block_size: int = 4 * 1024 * 1024
    max_concurrency: int = 4

    model_config = {
        "env_prefix": "AZKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def _validate_limits(self) -> "ClientSettings":
        problems: list[str] = []
        if self.max_retries < 1:
            problems.append("AZKIT_MAX_RETRIES must be at least 1")
        if self.block_size <= 0:
            problems.append("AZKIT_BLOCK_SIZE must be positive")
        if self.max_concurrency < 1:
            problems.append("AZKIT_MAX_CONCURRENCY must be at least 1")
        if problems:
            raise ValueError("; ".join(problems))
        self.management_url = self.management_url.rstrip("/")
        return self


settings = ClientSettings()
