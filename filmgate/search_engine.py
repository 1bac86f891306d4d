"""
Search engine module.
Scans the catalog for a keyword, keeps matches in a bounded buffer, and ranks them.
"""

from typing import Optional  # type annotations for clarity

# Import project modules for data structures and components
from .catalog import Catalog  # read-only movie collection
from .matching import matches  # case-insensitive substring test
from .models import MAX_RESULTS, MatchResult, ResultBuffer, SearchOutcome  # core data classes
from .ranking import Ranker  # rating order

# Import loguru for console logging
from loguru import logger  # simple structured logger


class SearchEngine:
	"""
	Lock-free search over a shared catalog.
	Holds no mutable state of its own, so one engine can serve many threads at once.
	"""
	def __init__(
		self,
		catalog: Catalog,  # dataset of movies
		ranker: Optional[Ranker] = None,  # ordering of matches
		max_results: int = MAX_RESULTS,  # cap on matches kept per keyword
	):
		self.catalog = catalog  # keep dataset reference
		self.ranker = ranker or Ranker()  # ranker instance
		self.max_results = max_results  # result cap
		logger.debug(f"[Engine] Ready over {len(catalog)} movies (max_results={max_results})")

	def search(self, keyword: str) -> SearchOutcome:
		"""Match every movie description against the keyword and return the ranked outcome."""
		buffer = ResultBuffer(self.max_results)  # fresh per request
		for position, movie in enumerate(self.catalog):  # scan in insertion order
			if matches(movie.description, keyword):
				buffer.add(MatchResult(position=position, movie=movie, rating=movie.popularity_rating))

		if buffer.dropped:
			logger.debug(f"[Engine] '{keyword}': kept {len(buffer)} matches, dropped {buffer.dropped} over the cap")

		ranked = self.ranker.rank(buffer)  # sort by rating
		logger.debug(f"[Engine] '{keyword}': {len(ranked)} ranked matches")
		return SearchOutcome(keyword=keyword, matches=ranked, dropped=buffer.dropped)
