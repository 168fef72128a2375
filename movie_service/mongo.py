from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from movie_service.config import Settings
from movie_service.logging import logger


class MongoStore:
    """Owns the single motor client of the process.

    Built once on startup and kept on ``app.state.store``; handlers get the
    collection through :func:`get_movies_collection`.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str):
        self.client = client
        self.db = client[db_name]

        # Collections
        self.movies: AsyncIOMotorCollection = self.db["movies"]

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoStore":
        return cls(AsyncIOMotorClient(settings.mongodb_uri), settings.mongo_db)

    async def connect(self) -> bool:
        # motor connects lazily, ping to find out whether the server is there
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: {!r}", e)
            return False
        logger.info("MongoDB connected")
        return True

    async def ensure_indexes(self) -> None:
        await self.movies.create_index([("movie_name", 1)])

    def close(self) -> None:
        self.client.close()


def get_movies_collection(request: Request) -> AsyncIOMotorCollection:
    return request.app.state.store.movies
