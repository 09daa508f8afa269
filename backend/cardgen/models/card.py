"""Greeting card request/response data models."""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_OCCASION = "christmas"
DEFAULT_ASPECT_RATIO = "1:1"


class _CamelModel(BaseModel):
    """Base for models exchanged with the frontend as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _RequestModel(_CamelModel):
    """Request body: optional text fields default to "" and treat null as missing.

    ``occasion`` is left out so that null reaches the catalog and resolves to
    the "general" entry.
    """

    @field_validator(
        "selfie_base64",
        "recipient_name",
        "sender_name",
        "greeting",
        "custom_instructions",
        "card_base64",
        "edit_instructions",
        "prompt",
        "aspect_ratio",
        mode="before",
        check_fields=False,
    )
    @classmethod
    def _null_to_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class OccasionConfig(_CamelModel):
    """Prompt wording for one occasion. Entries are immutable."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    scene: str
    interior: str
    attire: str
    decorations: str
    default_title: str


class OccasionSummary(_CamelModel):
    """Public view of an occasion, returned by GET /api/occasions."""

    key: str
    name: str
    default_title: str


class CardRequest(_RequestModel):
    """Body of POST /api/generate-card."""

    selfie_base64: str = ""
    recipient_name: str = ""
    sender_name: str = ""
    greeting: str = ""
    custom_instructions: str = ""
    occasion: Optional[str] = DEFAULT_OCCASION
    model: Optional[str] = None


class EditRequest(_RequestModel):
    """Body of POST /api/edit-card."""

    card_base64: str = ""
    edit_instructions: str = ""
    model: Optional[str] = None


class GenerateRequest(_RequestModel):
    """Body of the legacy POST /api/generate endpoint.

    ``image_size`` is accepted for compatibility with older clients and ignored.
    """

    prompt: str = ""
    model: Optional[str] = None
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    image_size: Optional[Union[str, int]] = None


class GenerationResult(BaseModel):
    """JSON envelope returned by every generation endpoint."""

    success: bool
    image: Optional[str] = Field(default=None, description="data:{mime};base64,{data}")
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response of GET /api/health."""

    status: str
    model: str
