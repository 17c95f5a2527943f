from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./aquaflow.db"
    auth_email_domain: str = "aquaflow.local"
    identity_header: str = "X-User-Email"
    invoice_prefix: str = "INV"
    invoice_due_days: int = 7
    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
