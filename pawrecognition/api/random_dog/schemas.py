"""Random dog API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Attribution(BaseModel):
    """Credit for an Unsplash photo, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    photographer: str | None = None
    photographer_url: str | None = None
    unsplash_url: str | None = None


class RandomDogResponse(BaseModel):
    image: str  # data URI
    attribution: Attribution | None = None
