from typing import Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from starlette.datastructures import UploadFile as StarletteUploadFile

from movie_service.errors import MovieServiceError
from movie_service.logging import logger
from movie_service.mongo import get_movies_collection
from movie_service.schemas import FormError, validate_movie_update, validate_new_movie
from movie_service.utils.images import to_buffer_json, to_data_uri


router = APIRouter(prefix="/api/movie", tags=["movies"])

# anything the driver can throw at us, a malformed id included
STORAGE_ERRORS = (PyMongoError, InvalidId)

INT64_MAX = 2**63 - 1


def _project_movie(doc: dict) -> dict:
    out = dict(doc)
    out["_id"] = str(doc["_id"])
    out["image"] = to_buffer_json(bytes(doc.get("image") or b""))
    return out


def _project_movie_data_uri(doc: dict) -> dict:
    out = dict(doc)
    out["_id"] = str(doc["_id"])
    out["image"] = to_data_uri(bytes(doc.get("image") or b""), doc.get("contentType", ""))
    return out


def _parse_limit(raw: str | None) -> int:
    """0 means no limit, same as an absent or non-numeric value.

    Clamped to the int64 range, bson refuses to encode anything larger.
    """
    if not raw:
        return 0
    try:
        n = int(float(raw))
    except (ValueError, OverflowError):
        return 0
    return max(-INT64_MAX, min(n, INT64_MAX))


async def _read_upload(upload: UploadFile | str | None) -> tuple[bytes | None, str | None]:
    # a plain text "image" field counts as no file
    if not isinstance(upload, StarletteUploadFile):
        return None, None
    data = await upload.read()
    await upload.close()
    return data, upload.content_type


@router.post("", status_code=201)
async def create_movie(
    image: Union[UploadFile, str, None] = File(None),
    movie_name: Optional[str] = Form(None),
    movie_rating: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    movies: AsyncIOMotorCollection = Depends(get_movies_collection),
):
    data, content_type = await _read_upload(image)
    result = validate_new_movie(movie_name, movie_rating, description, data, content_type)
    if isinstance(result, FormError):
        logger.debug(f"Rejected movie upload: {result.message}")
        raise MovieServiceError(400, result.message)

    doc = result.model_dump()
    try:
        await movies.insert_one(doc)
    except STORAGE_ERRORS as e:
        logger.exception("Failed to insert movie")
        raise MovieServiceError(400, "Error creating movie", error=str(e))

    logger.info(f"Created movie {doc['_id']} ({doc['movie_name']!r}, {len(data)} bytes)")
    return JSONResponse(status_code=201, content=_project_movie(doc))


@router.get("")
async def list_movies(
    limit: Optional[str] = Query(None, description="max number of records, 0 or absent for all"),
    movies: AsyncIOMotorCollection = Depends(get_movies_collection),
):
    try:
        cursor = movies.find({})
        n = _parse_limit(limit)
        if n:
            cursor = cursor.limit(n)
        docs = [_project_movie(d) async for d in cursor]
    except STORAGE_ERRORS as e:
        logger.exception("Failed to list movies")
        raise MovieServiceError(500, "Error fetching movies", err=str(e))
    return docs


@router.get("/{movie_id}")
async def get_movie(
    movie_id: str,
    movies: AsyncIOMotorCollection = Depends(get_movies_collection),
):
    try:
        doc = await movies.find_one({"_id": ObjectId(movie_id)})
    except STORAGE_ERRORS as e:
        logger.exception(f"Failed to fetch movie {movie_id}")
        raise MovieServiceError(500, "Error fetching movie", error=str(e))
    if not doc:
        raise MovieServiceError(404, "Movie not found")
    return _project_movie_data_uri(doc)


@router.put("/{movie_id}")
async def update_movie(
    movie_id: str,
    image: Union[UploadFile, str, None] = File(None),
    movie_name: Optional[str] = Form(None),
    movie_rating: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    movies: AsyncIOMotorCollection = Depends(get_movies_collection),
):
    data, content_type = await _read_upload(image)
    result = validate_movie_update(movie_name, movie_rating, description, data, content_type)
    if isinstance(result, FormError):
        logger.debug(f"Rejected update of movie {movie_id}: {result.message}")
        raise MovieServiceError(400, result.message)

    changes = result.to_set()
    try:
        q = {"_id": ObjectId(movie_id)}
        if changes:
            doc = await movies.find_one_and_update(
                q, {"$set": changes}, return_document=ReturnDocument.AFTER,
            )
        else:
            doc = await movies.find_one(q)
    except STORAGE_ERRORS as e:
        logger.exception(f"Failed to update movie {movie_id}")
        raise MovieServiceError(500, "Error updating movie", error=str(e))

    if not doc:
        raise MovieServiceError(404, f"Movie with ID {movie_id} not found")

    logger.info(f"Updated movie {movie_id}: {sorted(changes)}")
    return _project_movie(doc)


@router.delete("/{movie_id}")
async def delete_movie(
    movie_id: str,
    movies: AsyncIOMotorCollection = Depends(get_movies_collection),
):
    try:
        doc = await movies.find_one_and_delete({"_id": ObjectId(movie_id)})
    except STORAGE_ERRORS as e:
        logger.exception(f"Failed to delete movie {movie_id}")
        raise MovieServiceError(500, "Error deleting movie", error=str(e))

    if not doc:
        raise MovieServiceError(404, f"Movie with ID {movie_id} not found")

    logger.info(f"Deleted movie {movie_id}")
    return {"message": f"Movie with ID {movie_id} deleted"}
