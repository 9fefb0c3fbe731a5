from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Promptbank"
    debug: bool = False

    # Import sessions live in memory only
    max_import_sessions: int = 1024
    import_session_ttl_seconds: int = 60 * 60

    # Ids minted for banks proposed during an import
    new_bank_id_prefix: str = "bank_"

    # Category the bank picker starts on
    default_category_id: str = "character"


settings = Settings()
