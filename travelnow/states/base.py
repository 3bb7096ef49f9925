from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for records exchanged with the backend (camelCase JSON)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def id_field(description: str):
    # Backend documents carry Mongo style "_id"; some payloads already use "id".
    return Field(
        None,
        validation_alias=AliasChoices("id", "_id"),
        description=description,
    )
