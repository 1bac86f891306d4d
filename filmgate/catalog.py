"""
Catalog module.
Immutable, ordered, in-memory collection of movies shared read-only by every search task.
"""

from typing import Iterable, Iterator, Tuple

from loguru import logger

from .errors import CatalogCapacityError
from .models import MAX_MOVIES, Movie


class Catalog:
	"""
	Read-only sequence of movies addressed by position.
	Insertion order is the only index. Nothing mutates the catalog after construction,
	so concurrent readers share it without locking.
	"""

	def __init__(self, movies: Iterable[Movie], capacity: int = MAX_MOVIES):
		items: Tuple[Movie, ...] = tuple(movies)
		if len(items) > capacity:
			raise CatalogCapacityError(f"Catalog holds at most {capacity} movies, got {len(items)}")
		self._movies = items  # tuple keeps the storage immutable
		logger.debug(f"[Catalog] Loaded {len(items)} movies (capacity {capacity})")

	@classmethod
	def from_movies(cls, movies: Iterable[Movie], capacity: int = MAX_MOVIES) -> 'Catalog':
		return cls(movies, capacity=capacity)

	def get(self, position: int) -> Movie:
		"""Return the movie stored at a scan position."""
		if position < 0 or position >= len(self._movies):
			raise IndexError(f"No movie at position {position}")
		return self._movies[position]

	def __len__(self) -> int:
		return len(self._movies)

	def __iter__(self) -> Iterator[Movie]:
		return iter(self._movies)
