"""
In-memory movie store.

Movies live in a plain ordered list for the lifetime of a store; nothing
is written back to disk, so a restart resets to the seed file.
Handlers run in a thread pool, so every access goes through one lock.
"""

import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

from schemas import Movie

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "movies.json"


class MovieStore:
    def __init__(self, movies: Optional[List[dict]] = None):
        self._movies: List[dict] = copy.deepcopy(list(movies or []))
        # Held by handlers across a lookup followed by a mutation
        self.lock = threading.RLock()

    @classmethod
    def from_seed(cls, path=None) -> "MovieStore":
        """Build a store from the static JSON seed, validating every record."""
        path = Path(path or os.getenv("MOVIES_SEED_PATH") or DEFAULT_SEED_PATH)
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)
        for record in records:
            Movie.model_validate(record)
        ids = [record["id"] for record in records]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate movie ids in seed file {path}")
        logger.info("Loaded %d movies from %s", len(records), path)
        return cls(records)

    def __len__(self):
        with self.lock:
            return len(self._movies)

    def list(self) -> List[dict]:
        with self.lock:
            return copy.deepcopy(self._movies)

    def find_by_id(self, movie_id: str) -> Optional[dict]:
        with self.lock:
            for movie in self._movies:
                if movie["id"] == movie_id:
                    return copy.deepcopy(movie)
        return None

    def find_index_by_id(self, movie_id: str) -> Optional[int]:
        with self.lock:
            for index, movie in enumerate(self._movies):
                if movie["id"] == movie_id:
                    return index
        return None

    def get_at(self, index: int) -> dict:
        with self.lock:
            return copy.deepcopy(self._movies[index])

    def append(self, movie: dict) -> None:
        with self.lock:
            if self.find_index_by_id(movie["id"]) is not None:
                raise ValueError(f"Movie id already exists: {movie['id']}")
            self._movies.append(copy.deepcopy(movie))

    def replace_at(self, index: int, movie: dict) -> None:
        with self.lock:
            if movie["id"] != self._movies[index]["id"]:
                raise ValueError("Movie id cannot be changed")
            self._movies[index] = copy.deepcopy(movie)

    def remove_at(self, index: int) -> dict:
        with self.lock:
            return self._movies.pop(index)
