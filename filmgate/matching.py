"""
Keyword matching.
Case-insensitive substring test applied to each movie description during a scan.
"""

from typing import Optional


def matches(text: Optional[str], keyword: Optional[str]) -> bool:
	"""
	Return True when keyword occurs in text, ignoring case.
	An empty keyword never matches, and None for either argument is a non-match.
	"""
	if text is None or keyword is None:  # absent input is a miss, not a failure
		return False
	if not keyword:
		return False
	return keyword.casefold() in text.casefold()
