import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_service.config import settings
from movie_service.endpoints import movies
from movie_service.errors import MovieServiceError, movie_service_error_handler
from movie_service.logging import logger
from movie_service.mongo import MongoStore


app = FastAPI(title="Movie Record Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(MovieServiceError, movie_service_error_handler)
app.include_router(movies.router)


@app.on_event("startup")
async def startup_event():
    store = MongoStore.from_settings(settings)
    app.state.store = store
    # a dead database must not keep the server from starting
    if await store.connect():
        await store.ensure_indexes()


@app.on_event("shutdown")
async def shutdown_event():
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()


def run():
    logger.info(f"Server is running on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
