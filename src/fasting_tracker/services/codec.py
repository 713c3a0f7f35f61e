"""JSON codecs mapping domain entities to stored string values.

Stored documents use camelCase field names so values written by earlier
browser-based clients decode unchanged. The codec only knows the shape of each
record; business rules live in the services.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Generic, TypeVar

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)

from fasting_tracker.domain.errors import CorruptRecordError
from fasting_tracker.domain.fasting import FastingSession, FastingStatus
from fasting_tracker.domain.meals import MealEntry, WorkoutEntry
from fasting_tracker.domain.models import LoginState, User
from fasting_tracker.domain.profiles import Gender, Profile

EntityT = TypeVar("EntityT")


class _StoredRecord(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class UserDocument(_StoredRecord):
    """Stored shape of a user account."""

    email: str
    password: str
    name: str
    created_at: AwareDatetime = Field(alias="createdAt")
    picture: str | None = None
    google_id: str | None = Field(default=None, alias="googleId")


class LoginStateDocument(_StoredRecord):
    """Stored shape of the logged-in marker."""

    is_logged_in: bool = Field(alias="isLoggedIn")
    email: str
    name: str


class ProfileDocument(_StoredRecord):
    """Stored shape of a body-metrics profile."""

    name: str
    gender: Gender
    birth_date: date = Field(alias="birthDate")
    weight: float
    height: float
    bmr: int
    age: int
    completed_at: AwareDatetime = Field(alias="completedAt")


class FastingSessionDocument(_StoredRecord):
    """Stored shape of a fasting session."""

    method: str
    start_time: AwareDatetime = Field(alias="startTime")
    duration: float
    status: FastingStatus
    paused_time: float | None = Field(default=None, alias="pausedTime")


class MealEntryDocument(_StoredRecord):
    """Stored shape of a meal entry."""

    id: str
    name: str
    calories: float
    timestamp: AwareDatetime


class WorkoutEntryDocument(_StoredRecord):
    """Stored shape of a workout entry."""

    id: str
    date: str
    type: str
    duration: float
    calories_burned: float = Field(alias="caloriesBurned")
    completed_at: AwareDatetime = Field(alias="completedAt")


@dataclass
class EntityCodec(Generic[EntityT]):
    """Encode and decode one entity kind, singly or as an ordered list."""

    entity_type: type[EntityT]
    document_type: type[_StoredRecord]
    _list_adapter: TypeAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._list_adapter = TypeAdapter(list[self.document_type])

    def encode(self, entity: EntityT) -> str:
        """Serialize one entity to a JSON string."""
        return self._to_document(entity).model_dump_json(
            by_alias=True, exclude_none=True
        )

    def decode(self, raw: str) -> EntityT:
        """Deserialize one entity, raising CorruptRecordError on bad input."""
        try:
            document = self.document_type.model_validate_json(raw)
        except ValidationError as exc:
            raise CorruptRecordError(
                f"Stored {self.entity_type.__name__} is malformed"
            ) from exc
        return self._to_entity(document)

    def to_payload(self, entity: EntityT) -> dict[str, object]:
        """Return the stored JSON shape of an entity as a plain dict."""
        return self._to_document(entity).model_dump(
            mode="json", by_alias=True, exclude_none=True
        )

    def from_payload(self, payload: object) -> EntityT:
        """Build an entity from its stored JSON shape already parsed."""
        try:
            document = self.document_type.model_validate(payload)
        except ValidationError as exc:
            raise CorruptRecordError(
                f"{self.entity_type.__name__} payload is malformed"
            ) from exc
        return self._to_entity(document)

    def encode_many(self, entities: list[EntityT]) -> str:
        """Serialize an ordered list of entities."""
        documents = [self._to_document(entity) for entity in entities]
        return self._list_adapter.dump_json(
            documents, by_alias=True, exclude_none=True
        ).decode()

    def decode_many(self, raw: str) -> list[EntityT]:
        """Deserialize an ordered list; any bad element rejects the whole list."""
        try:
            documents = self._list_adapter.validate_json(raw)
        except ValidationError as exc:
            raise CorruptRecordError(
                f"Stored {self.entity_type.__name__} list is malformed"
            ) from exc
        return [self._to_entity(document) for document in documents]

    def _to_document(self, entity: EntityT) -> _StoredRecord:
        return self.document_type.model_validate(asdict(entity))

    def _to_entity(self, document: _StoredRecord) -> EntityT:
        return self.entity_type(**document.model_dump())


USER_CODEC = EntityCodec(User, UserDocument)
LOGIN_STATE_CODEC = EntityCodec(LoginState, LoginStateDocument)
PROFILE_CODEC = EntityCodec(Profile, ProfileDocument)
FASTING_SESSION_CODEC = EntityCodec(FastingSession, FastingSessionDocument)
MEAL_ENTRY_CODEC = EntityCodec(MealEntry, MealEntryDocument)
WORKOUT_ENTRY_CODEC = EntityCodec(WorkoutEntry, WorkoutEntryDocument)
