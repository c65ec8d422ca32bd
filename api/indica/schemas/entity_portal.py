from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EntityPortalUpdate(BaseModel):
    organizational_structure: dict | None = None
    finances: dict | None = None
    procurement: dict | None = None
    staff: list[dict] | None = None
    programs: list[dict] | None = None
    reports: list[dict] | None = None
    legislation: list[dict] | None = None
    cultural_calendar: list[dict] | None = None
    ombudsman: dict | None = None
    faq: list[dict] | None = None
    open_data: list[dict] | None = None


class EntityPortalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    entity_id: int
    organizational_structure: dict
    finances: dict
    procurement: dict
    staff: list
    programs: list
    reports: list
    legislation: list
    cultural_calendar: list
    ombudsman: dict
    faq: list
    open_data: list
    created_at: datetime
    updated_at: datetime
