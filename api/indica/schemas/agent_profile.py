from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from indica.schemas.endereco import Endereco


class AgentProfileUpsert(BaseModel):
    date_of_birth: date
    gender: str = Field(min_length=1, max_length=50)
    race_ethnicity: str = Field(min_length=1, max_length=50)
    education: str = Field(min_length=1, max_length=100)
    address: Endereco
    monthly_income: float = Field(ge=0)
    household_income: float = Field(ge=0)
    household_members: int = Field(ge=1)
    occupation: str = Field(min_length=1, max_length=100)
    work_regime: str = Field(min_length=1, max_length=100)
    cultural_area: list[str] = Field(min_length=1)
    years_of_experience: int = Field(ge=0)
    portfolio_links: list[str] = Field(default_factory=list)
    biography: str = Field(min_length=1, max_length=2000)
    has_disability: bool = False
    disability_details: str | None = None
    accessibility_needs: list[str] = Field(default_factory=list)


class AgentProfilePublicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date_of_birth: date
    gender: str
    race_ethnicity: str
    education: str
    address: dict
    occupation: str
    work_regime: str
    cultural_area: list[str]
    years_of_experience: int
    portfolio_links: list[str]
    biography: str
    created_at: datetime
    updated_at: datetime


class AgentProfileOut(AgentProfilePublicOut):
    monthly_income: float
    household_income: float
    household_members: int
    has_disability: bool
    disability_details: str | None
    accessibility_needs: list[str]
