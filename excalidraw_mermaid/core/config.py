from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "WARNING"
    # "console" for human-readable lines, "json" for one JSON object per line
    log_format: str = "console"
    # Encoding used to read documents and write Mermaid output
    encoding: str = "utf-8"

    class Config:
        env_prefix = "EXCALIDRAW_MERMAID_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
