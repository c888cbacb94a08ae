"""Adapter configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    test_mode: bool = False
    require_avs: bool = False  # Forced off whenever test mode is toggled
    live_server: str = "ics2ws.ic3.com"
    test_server: str = "ics2wstest.ic3.com"
    port: int = 443
    path: str = "commerce/1.x/transactionProcessor"
    verify_ssl_in_test: bool = False  # Live mode always verifies
    client_library: str = "Python-cybersource-lite"
    log_level: str = "INFO"

    model_config = {"env_prefix": "CYBERSOURCE_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
