from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Pricing Triage API"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3005

    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    prod_base_url: str = "https://api.prod.polly.io"
    stage_base_url: str = "https://api.stage.polly.io"
    request_timeout_seconds: float = 30.0
    changesets_page_size: int = 3

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _base_urls: dict[str, str] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: object) -> None:
        object.__setattr__(
            self,
            "_base_urls",
            {
                "prod": self.prod_base_url.rstrip("/"),
                "stage": self.stage_base_url.rstrip("/"),
            },
        )

    @property
    def environments(self) -> list[str]:
        return list(self._base_urls)

    def base_url_for(self, environment: str) -> str:
        """Base URL for a named environment; unknown names fall back to stage."""
        return self._base_urls.get(environment, self._base_urls["stage"])


settings = Settings()
