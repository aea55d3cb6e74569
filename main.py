import os
import logging
import uuid
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Header, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from database import MovieStore
from schemas import format_errors, validate_movie, validate_partial_movie

logger = logging.getLogger(__name__)
router = APIRouter()

PORT = int(os.getenv("PORT", 3000))
HOST = os.getenv("HOST", "0.0.0.0")

DEFAULT_ACCEPTED_ORIGINS = [
    "http://localhost:8080",
    "http://localhost:1234",
    "http://localhost:movies.com",
]
ACCEPTED_ORIGINS = [
    o.strip() for o in os.getenv("ACCEPTED_ORIGINS", ",".join(DEFAULT_ACCEPTED_ORIGINS)).split(",")
    if o.strip()
]
ALLOWED_METHODS = "GET, POST, PATCH, DELETE"

NOT_FOUND = {"message": "Movie not found"}


# ---------------------- Helpers ----------------------

def resolve_origin(origin: Optional[str], accepted_origins: List[str]) -> Optional[str]:
    """
    Value to send back as Access-Control-Allow-Origin, or None.

    A request without Origin is same-origin or not from a browser, so it is
    allowed but there is nothing to echo. Listed origins are echoed
    verbatim; matching is exact, no wildcards.
    """
    if not origin:
        return None
    if origin in accepted_origins:
        return origin
    return None


def cors_headers(request: Request, origin: Optional[str], methods: bool = False) -> dict:
    allowed = resolve_origin(origin, request.app.state.accepted_origins)
    if allowed is None:
        return {}
    headers = {"Access-Control-Allow-Origin": allowed}
    if methods:
        headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    return headers


def get_store(request: Request) -> MovieStore:
    return request.app.state.store


def matches_genre(movie: dict, genre: str) -> bool:
    wanted = genre.lower()
    return any(g.lower() == wanted for g in movie.get("genre", []))


# ---------------------- Movie Endpoints ----------------------

@router.get("/")
def read_root():
    return {"message": "Movies API is running"}


@router.get("/movies")
def list_movies(
    request: Request,
    response: Response,
    genre: Optional[str] = Query(None, description="Case-insensitive genre filter"),
    origin: Optional[str] = Header(None),
    store: MovieStore = Depends(get_store),
):
    response.headers.update(cors_headers(request, origin))
    movies = store.list()
    if genre:
        return [m for m in movies if matches_genre(m, genre)]
    return movies


@router.get("/movies/{movie_id}")
def get_movie(movie_id: str, store: MovieStore = Depends(get_store)):
    movie = store.find_by_id(movie_id)
    if movie:
        return movie
    logger.info("Movie %s not found", movie_id)
    return JSONResponse(status_code=404, content=NOT_FOUND)


@router.post("/movies", status_code=201)
def create_movie(payload: Any = Body(None), store: MovieStore = Depends(get_store)):
    result = validate_movie(payload)
    if not result.success:
        logger.info("Rejected new movie: %s", result.error)
        return JSONResponse(status_code=400, content={"error": result.error})

    new_movie = {"id": str(uuid.uuid4()), **result.data}
    store.append(new_movie)
    logger.info("Created movie %s (%s)", new_movie["id"], new_movie["title"])
    return JSONResponse(status_code=201, content=new_movie)


@router.patch("/movies/{movie_id}")
def update_movie(movie_id: str, payload: Any = Body(None), store: MovieStore = Depends(get_store)):
    result = validate_partial_movie(payload)
    if not result.success:
        logger.info("Rejected update for movie %s: %s", movie_id, result.error)
        return JSONResponse(status_code=400, content={"error": result.error})

    with store.lock:
        index = store.find_index_by_id(movie_id)
        if index is None:
            logger.info("Movie %s not found", movie_id)
            return JSONResponse(status_code=404, content=NOT_FOUND)

        updated = {**store.get_at(index), **result.data}
        store.replace_at(index, updated)

    logger.info("Updated movie %s fields=%s", movie_id, sorted(result.data))
    return updated


@router.delete("/movies/{movie_id}")
def delete_movie(
    movie_id: str,
    request: Request,
    origin: Optional[str] = Header(None),
    store: MovieStore = Depends(get_store),
):
    headers = cors_headers(request, origin)
    with store.lock:
        index = store.find_index_by_id(movie_id)
        if index is None:
            logger.info("Movie %s not found", movie_id)
            return JSONResponse(status_code=404, content=NOT_FOUND, headers=headers)
        store.remove_at(index)

    logger.info("Deleted movie %s", movie_id)
    return JSONResponse(content={"message": "Movie deleted"}, headers=headers)


@router.options("/movies/{movie_id}")
def preflight_movie(movie_id: str, request: Request, origin: Optional[str] = Header(None)):
    return Response(status_code=200, headers=cors_headers(request, origin, methods=True))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Unparseable bodies get the same 400 shape as schema failures
    return JSONResponse(status_code=400, content={"error": format_errors(exc.errors())})


# ---------------------- App ----------------------

def create_app(store: Optional[MovieStore] = None, accepted_origins: Optional[List[str]] = None) -> FastAPI:
    app = FastAPI(title="Movies API")
    app.state.store = store if store is not None else MovieStore.from_seed()
    app.state.accepted_origins = list(accepted_origins if accepted_origins is not None else ACCEPTED_ORIGINS)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(router)
    return app


app = create_app()


def serve():
    import uvicorn
    logger.info("Server running on port %d", PORT)
    uvicorn.run(app, host=HOST, port=PORT, server_header=False)


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    serve()
