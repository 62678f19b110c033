"""Pydantic schemas for saved trips. JSON keys are camelCase (tripId, locationNames)."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TripCreateRequest(BaseModel):
    """Trip name plus the ordered list of location names."""

    name: str = Field(..., max_length=255)
    location_names: list[str] = Field(
        default_factory=list,
        max_length=100,
        validation_alias=AliasChoices("locations", "locationNames", "location_names"),
        description="Location names in visiting order",
    )


class TripSummary(BaseModel):
    """One saved trip with its location names in saved order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trip_id: int
    name: str
    location_names: list[str]


class TripSavedResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Trip and locations saved successfully."
    trip_id: int


class TripDeletedResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str = "Trip deleted successfully."
    deleted_trip_id: int
