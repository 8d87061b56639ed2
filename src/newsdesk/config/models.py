"""Configuration models using Pydantic."""

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_API_BASE_URL = "https://agent-prod.studio.lyzr.ai"

MANAGER_AGENT_ID = "699c700d46369d6f6bfe4685"
RESEARCH_AGENT_ID = "699c6fecf75ee4297f34ba93"
EMAIL_AGENT_ID = "699c6ffc0c7a75370303a727"
SCHEDULE_ID = "699c7013399dfadeac38a77b"


class AgentsConfig(BaseModel):
    """Remote agents taking part in the digest workflow.

    Only the manager agent is invoked directly; it delegates research and
    email delivery to the other two.
    """

    manager: str = MANAGER_AGENT_ID
    research: str = RESEARCH_AGENT_ID
    email: str = EMAIL_AGENT_ID


class ScheduleConfig(BaseModel):
    """Configuration for the remote digest schedule."""

    schedule_id: str = SCHEDULE_ID
    # Control the first listed schedule when schedule_id is not returned.
    # Disable to surface an explicit unknown state instead.
    fallback_to_first: bool = True


class ApiConfig(BaseModel):
    """Connection settings for the agent platform API."""

    base_url: str = DEFAULT_API_BASE_URL
    api_key: SecretStr | None = None
    timeout: float = 120.0
    user_id: str = "newsdesk"

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class PollingConfig(BaseModel):
    """Execution log polling."""

    interval_seconds: float = Field(default=60.0, gt=0)
    history_limit: int = Field(default=50, ge=1)


class FeedbackConfig(BaseModel):
    """How long transient operator feedback stays visible."""

    saved_confirmation_seconds: float = Field(default=3.0, ge=0)
    send_message_seconds: float = Field(default=5.0, ge=0)


class ConfigError(Exception):
    """Configuration error."""

    pass


class NewsdeskConfig(BaseModel):
    """Root configuration model."""

    agents: AgentsConfig = Field(default_factory=AgentsConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
