import pytest
from fastapi.testclient import TestClient

from database import MovieStore
from main import create_app

ACCEPTED = ["http://localhost:8080", "http://localhost:1234"]


@pytest.fixture
def seed_movies():
    return [
        {
            "id": "c8a7d63f-3b04-44d3-9d95-8782fd7dcfaf",
            "title": "The Dark Knight",
            "year": 2008,
            "director": "Christopher Nolan",
            "duration": 152,
            "poster": "https://posters.example.com/the-dark-knight.jpg",
            "genre": ["Action", "Crime", "Drama"],
            "rate": 9.0,
        },
        {
            "id": "9e6106f0-848b-4810-a11a-3d832a5610f9",
            "title": "Forrest Gump",
            "year": 1994,
            "director": "Robert Zemeckis",
            "duration": 142,
            "poster": "https://posters.example.com/forrest-gump.jpg",
            "genre": ["Drama", "Romance"],
            "rate": 8.8,
        },
    ]


@pytest.fixture
def store(seed_movies):
    """A fresh store per test, so mutations never leak between tests."""
    return MovieStore(seed_movies)


@pytest.fixture
def client(store):
    app = create_app(store=store, accepted_origins=ACCEPTED)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def inception():
    return {
        "title": "Inception",
        "year": 2010,
        "director": "Nolan",
        "duration": 148,
        "genre": ["Sci-Fi"],
        "rate": 8.8,
        "poster": "http://x/y.jpg",
    }
