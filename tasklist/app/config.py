from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Redis connection
    redis_host: str = Field("localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(6379, validation_alias="REDIS_PORT")
    # Empty password means "connect without AUTH"
    redis_password: str = Field("", validation_alias="REDIS_PASSWORD")

    # HTTP listener
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3000, validation_alias="PORT")
    app_env: str = Field(
        "development",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV"),
    )

    # Persisted layout
    todo_key_prefix: str = Field("todo:", validation_alias="TODO_KEY_PREFIX")
    todo_list_key: str = Field("todos:list", validation_alias="TODO_LIST_KEY")
    todo_counter_key: str = Field("todos:counter", validation_alias="TODO_COUNTER_KEY")

    # Send create/delete as one MULTI/EXEC instead of two separate writes
    atomic_writes: bool = Field(False, validation_alias="TODO_ATOMIC_WRITES")

    @property
    def redis_target(self) -> str:
        return f"{self.redis_host}:{self.redis_port}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
