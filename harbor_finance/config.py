from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "HARBOR_FINANCE_"}

    # Database
    database_url: str = "sqlite+aiosqlite:///./harbor_finance.db"

    # Share links are rendered by the marketplace frontend
    frontend_url: str = "https://harborlist.com"
    share_path: str = "/finance/shared"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    default_list_limit: int = 20
    max_list_limit: int = 100
    max_scenarios: int = 10

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
