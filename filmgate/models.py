"""
Data models for the Film Search Gate.
Defines the core data structures shared by the catalog, the search body, and the reports.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Iterator, List, Optional  # lists, iterators, and optional values

# Maximum stored lengths (characters) for movie text fields
MAX_TITLE_LEN = 99  # longest title kept
MAX_DIRECTOR_LEN = 99  # longest director name kept
MAX_DATE_LEN = 19  # longest release date string kept
MAX_DESC_LEN = 499  # longest description kept

MAX_MOVIES = 30  # catalog capacity
MAX_RESULTS = 30  # matches kept per search request
MAX_KEYWORD_LEN = 63  # longest keyword kept


def _bounded(value: Optional[str], limit: int) -> str:
	"""Coerce to text (None becomes empty) and cut to the field limit."""
	if value is None:  # absent field
		return ''
	return str(value)[:limit]


@dataclass(frozen=True)
class Movie:
	"""
	Represents a single movie in the catalog.
	Text fields are truncated to their limits on construction and never None.
	"""
	title: str  # movie title as displayed in reports
	director: str  # director's name
	release_date: str  # release date text, e.g. "2010-03-26"
	popularity_rating: float  # popularity score used as the rank key
	description: str  # short synopsis; the field keywords are matched against

	def __post_init__(self):
		# Frozen dataclass: normalize through object.__setattr__
		object.__setattr__(self, 'title', _bounded(self.title, MAX_TITLE_LEN))
		object.__setattr__(self, 'director', _bounded(self.director, MAX_DIRECTOR_LEN))
		object.__setattr__(self, 'release_date', _bounded(self.release_date, MAX_DATE_LEN))
		object.__setattr__(self, 'description', _bounded(self.description, MAX_DESC_LEN))
		rating = self.popularity_rating  # may arrive as None or a numeric string
		object.__setattr__(self, 'popularity_rating', float(rating) if rating is not None else 0.0)


@dataclass(frozen=True)
class MatchResult:
	"""A movie found relevant to a keyword, with its rank key."""
	position: int  # index of the movie in the catalog scan
	movie: Movie  # the matched record
	rating: float  # rank key (popularity rating)


@dataclass(frozen=True)
class SearchRequest:
	"""One keyword request handed to a search task."""
	keyword: str  # text searched for in descriptions
	request_id: int  # 1-based worker id shown in status lines

	def __post_init__(self):
		object.__setattr__(self, 'keyword', _bounded(self.keyword, MAX_KEYWORD_LEN))


class ResultBuffer:
	"""
	Bounded container for matches collected during one scan.
	Once full, further matches are dropped and counted; truncation is policy, not an error,
	so callers that need every match must not rely on a capped search.
	"""

	def __init__(self, capacity: int = MAX_RESULTS):
		if capacity < 0:
			raise ValueError(f"Result capacity cannot be negative: {capacity}")
		self.capacity = capacity  # maximum matches kept
		self.dropped = 0  # matches seen after the buffer filled up
		self._items: List[MatchResult] = []  # kept matches in scan order

	def add(self, match: MatchResult) -> bool:
		"""Keep the match if there is room; return False when it was dropped."""
		if len(self._items) >= self.capacity:
			self.dropped += 1
			return False
		self._items.append(match)
		return True

	def __len__(self) -> int:
		return len(self._items)

	def __iter__(self) -> Iterator[MatchResult]:
		return iter(self._items)


@dataclass
class SearchOutcome:
	"""What a finished search produced: ranked matches plus the overflow count."""
	keyword: str  # keyword as searched (already bounded)
	matches: List[MatchResult] = field(default_factory=list)  # ranked, possibly truncated
	dropped: int = 0  # matches cut by the result cap

	@property
	def count(self) -> int:
		return len(self.matches)
