"""
Ranking module.
Orders the matches of one search by popularity rating, highest first.
"""

from typing import Iterable, List

from .models import MatchResult


class Ranker:
	"""
	Sorts matches by rating (descending).
	Ties keep the order the catalog scan produced them in, since Python's sort is stable.
	"""

	def rank(self, results: Iterable[MatchResult]) -> List[MatchResult]:
		"""Return a new list in rank order; empty input gives an empty list."""
		return sorted(results, key=lambda r: r.rating, reverse=True)


_DEFAULT_RANKER = Ranker()


def rank(results: Iterable[MatchResult]) -> List[MatchResult]:
	"""Rank with the default descending-by-rating order."""
	return _DEFAULT_RANKER.rank(results)
