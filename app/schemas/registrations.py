from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class RegistrationRequest(BaseModel):
    event_id: int = Field(ge=1)
    user_id: int = Field(ge=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
