from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire (aligned with frontend types)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadModel(CamelModel):
    """
    Immutable record normalized from an upstream payload.
    Unknown keys are ignored; every field carries a default so partial payloads still validate.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )
