"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema    → application.yaml
    DatabaseSchema       → database.yaml
    LoggingSchema        → logging.yaml
    SecuritySchema       → security.yaml
    NotificationsSchema  → notifications.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    database: int
    external_api: int


class TelegramAppSchema(_StrictBase):
    enabled: bool
    mode: Literal["polling", "webhook"]
    webhook_path: str
    webhook_base_url: str
    drop_pending_updates: bool


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema
    telegram: TelegramAppSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    storage_backend: Literal["memory", "database"]
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# security.yaml
# =============================================================================


class JwtSchema(_StrictBase):
    algorithm: str
    access_token_expire_minutes: int
    audience: str


class PasswordPolicySchema(_StrictBase):
    min_length: int


class RegistrationSchema(_StrictBase):
    first_user_admin: bool


class SecuritySchema(_StrictBase):
    jwt: JwtSchema
    passwords: PasswordPolicySchema
    registration: RegistrationSchema


# =============================================================================
# notifications.yaml
# =============================================================================


class DispatcherSchema(_StrictBase):
    job_id: str
    default_interval_seconds: int = Field(ge=1)
    min_interval_seconds: int = Field(ge=1)
    default_enabled: bool
    misfire_grace_seconds: int


class RemindersSchema(_StrictBase):
    enabled: bool
    job_id: str


class NotificationsSchema(_StrictBase):
    dispatcher: DispatcherSchema
    reminders: RemindersSchema
