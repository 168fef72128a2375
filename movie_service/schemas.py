import math
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FormError(BaseModel):
    message: str


class NewMovie(BaseModel):
    movie_name: str = Field(..., min_length=1)
    movie_rating: float
    description: str = Field(..., min_length=1)
    image: bytes
    contentType: str = DEFAULT_CONTENT_TYPE


class MovieUpdate(BaseModel):
    movie_name: Optional[str] = None
    movie_rating: Optional[float] = None
    description: Optional[str] = None
    image: Optional[bytes] = None
    contentType: Optional[str] = None

    def to_set(self) -> dict:
        """Only the fields the client actually sent, ready for ``$set``."""
        return self.model_dump(exclude_none=True)


def parse_rating(raw: str | None) -> float | None:
    """Text rating -> float. None when it is not a finite number."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_new_movie(
    movie_name: str | None,
    movie_rating: str | None,
    description: str | None,
    image: bytes | None,
    content_type: str | None,
) -> NewMovie | FormError:
    if not image:
        return FormError(message="Image file is required.")

    if not movie_name or not movie_rating or not description:
        return FormError(message="All fields are required.")

    rating = parse_rating(movie_rating)
    if rating is None:
        return FormError(message="movie_rating must be a valid number.")

    return NewMovie(
        movie_name=movie_name,
        movie_rating=rating,
        description=description,
        image=image,
        contentType=content_type or DEFAULT_CONTENT_TYPE,
    )


def validate_movie_update(
    movie_name: str | None,
    movie_rating: str | None,
    description: str | None,
    image: bytes | None,
    content_type: str | None,
) -> MovieUpdate | FormError:
    rating = None
    if movie_rating is not None:
        rating = parse_rating(movie_rating)
        if rating is None:
            return FormError(message="movie_rating must be a valid number.")

    update = MovieUpdate(
        movie_name=movie_name,
        movie_rating=rating,
        description=description,
    )
    # image and contentType always travel together
    if image:
        update.image = image
        update.contentType = content_type or DEFAULT_CONTENT_TYPE
    return update
