import uuid

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from movie_service.main import app
from movie_service.mongo import get_movies_collection


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\xff\x00"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x00\xff\xd9"


@pytest.fixture
def movies_collection():
    client = AsyncMongoMockClient()
    return client[f"movies_{uuid.uuid4().hex}"]["movies"]


@pytest.fixture
def client(movies_collection):
    # no `with`: startup would try to reach a real MongoDB
    app.dependency_overrides[get_movies_collection] = lambda: movies_collection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_movie(client):
    def _create(name="Alien", rating="8.5", description="In space no one can hear you scream",
                image=PNG_BYTES, content_type="image/png"):
        return client.post(
            "/api/movie",
            data={"movie_name": name, "movie_rating": rating, "description": description},
            files={"image": ("poster.png", image, content_type)},
        )

    return _create


@pytest.fixture
def log_messages():
    from movie_service.logging import logger

    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
