"""
Movie Schemas

Pydantic models describing a movie record, used to validate request
payloads before anything touches the in-memory store.

- MovieCreate -> full payload accepted by POST /movies
- MovieUpdate -> partial payload accepted by PATCH /movies/{id}
- Movie       -> stored record (MovieCreate plus the generated id)

Unknown fields are ignored by every model, so a client sending "id"
can never choose or overwrite the identifier.
"""

from dataclasses import dataclass
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StrictFloat, StrictInt, TypeAdapter
from pydantic import ValidationError, field_validator

Genre = Literal[
    "Action",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Drama",
    "Fantasy",
    "Horror",
    "Romance",
    "Sci-Fi",
    "Thriller",
]

MIN_YEAR = 1900
MAX_YEAR = 2100
DEFAULT_RATE = 5

Title = Annotated[str, Field(min_length=1, description="Movie title")]
Year = Annotated[StrictInt, Field(ge=MIN_YEAR, le=MAX_YEAR, description="Release year")]
Director = Annotated[str, Field(min_length=1, description="Director name")]
Duration = Annotated[StrictInt, Field(gt=0, description="Running time in minutes")]
Poster = Annotated[str, Field(description="Poster image URL")]
Genres = Annotated[List[Genre], Field(min_length=1, description="One or more genres")]
Rate = Annotated[StrictFloat, Field(ge=0, le=10, description="Rating on a 0-10 scale")]

_poster_url = TypeAdapter(HttpUrl)


def _check_poster(value: str) -> str:
    try:
        _poster_url.validate_python(value)
    except ValidationError:
        raise ValueError("Poster must be a valid URL")
    return value


# ---------------------- Models ----------------------

class MovieCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Title
    year: Year
    director: Director
    duration: Duration
    poster: Poster
    genre: Genres
    rate: Rate = DEFAULT_RATE

    @field_validator("poster")
    @classmethod
    def poster_is_url(cls, value):
        return _check_poster(value)


class MovieUpdate(BaseModel):
    """
    Every field is optional, but a field that is sent must be valid:
    an explicit null is rejected just like a wrong type.
    """
    model_config = ConfigDict(extra="ignore")

    title: Title = None
    year: Year = None
    director: Director = None
    duration: Duration = None
    poster: Poster = None
    genre: Genres = None
    rate: Rate = None

    @field_validator("poster")
    @classmethod
    def poster_is_url(cls, value):
        return _check_poster(value)


class Movie(MovieCreate):
    id: str = Field(..., description="Server generated UUID")


# ---------------------- Validation ----------------------

@dataclass
class ValidationResult:
    success: bool
    data: Optional[dict] = None
    error: Optional[List[dict]] = None


def format_errors(errors) -> List[dict]:
    """Flatten pydantic error dicts into {field, path, message, type} items."""
    items = []
    for err in errors:
        path = [part for part in err.get("loc", ()) if part != "body"]
        items.append({
            "field": ".".join(str(part) for part in path),
            "path": path,
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return items


def _validate(model, payload: Any, **dump_options) -> ValidationResult:
    try:
        parsed = model.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(success=False, error=format_errors(e.errors()))
    return ValidationResult(success=True, data=parsed.model_dump(**dump_options))


def validate_movie(payload: Any) -> ValidationResult:
    return _validate(MovieCreate, payload)


def validate_partial_movie(payload: Any) -> ValidationResult:
    # exclude_unset keeps only what the client actually sent
    return _validate(MovieUpdate, payload, exclude_unset=True)
