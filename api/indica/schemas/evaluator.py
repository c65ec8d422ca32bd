from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from indica.schemas.user import UserResumoOut


class EvaluatorCreate(BaseModel):
    user_id: int
    entity_id: int | None = None
    specialties: list[str] = Field(default_factory=list)
    biography: str | None = None
    education: str | None = None
    experience: str | None = None


class EvaluatorUpdate(BaseModel):
    """Campos que o próprio parecerista pode alterar."""

    specialties: list[str] | None = None
    biography: str | None = None
    education: str | None = None
    experience: str | None = None


class EvaluatorAdminUpdate(EvaluatorUpdate):
    entity_id: int | None = None
    is_active: bool | None = None


class EvaluatorStatusUpdate(BaseModel):
    is_active: bool


class EvaluatorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    entity_id: int
    user: UserResumoOut | None = None
    specialties: list[str]
    biography: str | None
    education: str | None
    experience: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
