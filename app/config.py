from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # Supabase (fehlt URL oder Key -> Demo-Modus)
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Backend
    backend_timeout_seconds: Optional[float] = None
    demo_fetch_delay_seconds: float = 0.5

    # App
    app_name: str = 'Restaurant Reservierungen'
    debug: bool = False
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_demo_mode(self) -> bool:
        return not self.supabase_url.strip() or not self.supabase_anon_key.strip()


settings = Settings()
