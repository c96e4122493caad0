"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./payment_gateway.db"
    log_level: str = "INFO"
    bank_url: str = "http://localhost:8080"
    bank_connect_timeout_seconds: float = 10.0
    bank_read_timeout_seconds: float = 10.0
    use_mock_bank: bool = False  # Swap the HTTP bank for the in-process simulator
    mock_latency_ms: int = 0  # Simulated bank latency

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
