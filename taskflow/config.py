from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./taskflow.sqlite"
    app_env: str = "dev"
    log_level: str = "INFO"
    timezone: str = ""  # IANA name, empty = host local time

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", case_sensitive=False)


class AreaSeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    icon: str


# Seeded into an empty areas table at startup
DEFAULT_AREAS: tuple[AreaSeed, ...] = (
    AreaSeed(id="work", title="Work", description="Professional responsibilities", icon="Briefcase"),
    AreaSeed(id="personal", title="Personal", description="Personal life and growth", icon="User"),
    AreaSeed(id="health", title="Health", description="Physical and mental wellbeing", icon="Heart"),
    AreaSeed(id="finance", title="Finance", description="Financial management", icon="DollarSign"),
)


settings = Settings()
