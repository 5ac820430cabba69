from pydantic import BaseModel, Field

from src.domain.roles import Role


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class LifecycleRules(BaseModel):
    # Republishing keeps the first published_at unless this is set
    refresh_published_at: bool = False


class SuggestionRules(BaseModel):
    escape_html: bool = True
    max_suggested_chars: int = Field(default=200_000, gt=0)


class IdentityRules(BaseModel):
    use_mock: bool = False
    mock_actor_id: str = "mock-admin"
    mock_role: Role = Role.ADMIN


class NotificationRules(BaseModel):
    enabled: bool = True


class Rules(BaseModel):
    project: ProjectRules
    lifecycle: LifecycleRules = Field(default_factory=LifecycleRules)
    suggestions: SuggestionRules = Field(default_factory=SuggestionRules)
    identity: IdentityRules = Field(default_factory=IdentityRules)
    notifications: NotificationRules = Field(default_factory=NotificationRules)
