from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, AliasGenerator
from pydantic.alias_generators import to_camel


class PerformanceInDB(BaseModel):
    """Performance as returned to the website (camelCase keys)."""
    id: int
    title: str
    date: str
    venue: str
    city: str
    image: str
    description: str
    ticket_link: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class PerformanceListing(BaseModel):
    """Public listing split around today's date."""
    upcoming: List[PerformanceInDB]
    previous: List[PerformanceInDB]
