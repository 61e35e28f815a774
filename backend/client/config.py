"""
Client connection settings.

Each client is constructed with its own ClientConfig; there is no global
"current environment".
"""

from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Where the backend lives and how patiently to talk to it."""

    model_config = ConfigDict(frozen=True)

    backend_url: str = Field(..., description="Base URL, without the /api prefix")
    timeout_seconds: float = Field(default=10.0, gt=0)
    retry_attempts: int = Field(default=3, ge=0, description="Retries after the first attempt")
    retry_delay_seconds: float = Field(default=1.0, ge=0)

    @classmethod
    def for_environment(cls, name: str) -> "ClientConfig":
        """
        Preset for a named environment.

        Accepts "development" ("dev"), "local" and "production" ("prod").

        Raises:
            ValueError: For an unknown environment name
        """
        key = ENVIRONMENT_ALIASES.get(name.strip().lower(), name.strip().lower())
        try:
            return PRESETS[key]
        except KeyError:
            raise ValueError(
                f"Unknown environment {name!r}; expected one of {', '.join(PRESETS)}"
            ) from None


PRESETS: dict[str, ClientConfig] = {
    "development": ClientConfig(
        backend_url="http://192.168.0.105:5000",
        timeout_seconds=10.0,
        retry_attempts=3,
        retry_delay_seconds=1.0,
    ),
    "local": ClientConfig(
        backend_url="http://localhost:5000",
        timeout_seconds=5.0,
        retry_attempts=2,
        retry_delay_seconds=0.5,
    ),
    "production": ClientConfig(
        backend_url="https://barcode-powered-mobile-inventory-app-1.onrender.com",
        timeout_seconds=15.0,
        retry_attempts=3,
        retry_delay_seconds=2.0,
    ),
}

ENVIRONMENT_ALIASES = {"dev": "development", "prod": "production"}
