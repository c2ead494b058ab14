from datetime import datetime
from pydantic import BaseModel, ConfigDict, AliasGenerator
from pydantic.alias_generators import to_camel


class MemberInDB(BaseModel):
    """Member as returned to the website (camelCase keys)."""
    id: int
    name: str
    instrument: str
    bio: str
    image: str
    is_captain: bool
    order: int
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )
