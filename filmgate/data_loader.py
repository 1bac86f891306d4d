"""
Data loading module.
Provides the built-in movie list and loads movies from JSONL files into an immutable Catalog.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON lines
from typing import Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes and the read-only catalog built from them
from .models import Movie  # structured movie record
from .catalog import Catalog  # immutable container handed to the search core

# Console logging
from loguru import logger  # console logger


# Built-in dataset: (title, director, release date, popularity rating, description)
DEFAULT_MOVIES = (
	("How to Train Your Dragon", "Chris Sanders", "2010-03-26", 92.5,
		"A young Viking befriends a dragon and changes his village forever."),
	("Dragonheart", "Rob Cohen", "1996-05-31", 71.0,
		"A knight teams up with a dragon to overthrow a tyrant king."),
	("Spirited Away", "Hayao Miyazaki", "2001-07-20", 97.0,
		"A girl enters a spirit world filled with magic, mystery, and courage."),
	("Interstellar", "Christopher Nolan", "2014-11-07", 89.0,
		"A space mission searches for a new home for humanity beyond Earth."),
	("The Dark Knight", "Christopher Nolan", "2008-07-18", 94.0,
		"A crime saga where Gotham faces chaos and a villain tests the hero."),
	("Inception", "Christopher Nolan", "2010-07-16", 91.0,
		"A thief enters dreams to plant an idea; reality becomes uncertain."),
	("The Lord of the Rings", "Peter Jackson", "2001-12-19", 96.0,
		"An epic war against darkness with magic, courage, and sacrifice."),
	("Love Actually", "Richard Curtis", "2003-11-14", 78.0,
		"Multiple stories of love unfold during the holiday season."),
	("War Horse", "Steven Spielberg", "2011-12-25", 75.0,
		"A boy and his horse are separated by war and struggle to reunite."),
	("The Girl with the Dragon Tattoo", "David Fincher", "2011-12-21", 86.0,
		"A journalist and hacker investigate a mystery with dark secrets."),
)


class DataLoader:
	"""
	Handles loading movie data for the catalog.
	"""

	def load_default_movies(self) -> List[Movie]:
		"""Return the built-in movie list in its fixed order."""
		movies = [Movie(*row) for row in DEFAULT_MOVIES]  # tuple order matches Movie fields
		logger.debug(f"[DataLoader] Using built-in dataset of {len(movies)} movies")
		return movies

	def load_movies_from_jsonl(self, filepath: str) -> List[Movie]:
		"""
		Load movies from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns a list of Movie objects in file order.
		"""
		movies = []  # accumulator for parsed Movie objects
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		# Open the file and read line-by-line
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					data = json.loads(line.strip())  # parse JSON object per line
					movie = self._parse_movie_data(data)  # convert dict -> Movie
					movies.append(movie)  # collect
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
					continue  # move on
				except (TypeError, ValueError, AttributeError) as e:
					logger.warning(f"[DataLoader] Error parsing movie at line {line_num}: {e}")  # bad field values
					continue  # move on

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies  # return list

	def load_catalog(self, filepath: Optional[str] = None) -> Catalog:
		"""Build the read-only catalog from a JSONL file, or from the built-in list when no path is given."""
		movies = self.load_movies_from_jsonl(filepath) if filepath else self.load_default_movies()
		return Catalog.from_movies(movies)  # raises CatalogCapacityError when oversized

	def _parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary (from file) into a Movie object.
		Missing text becomes empty strings and a missing rating becomes 0.0.
		"""
		rating = data.get('popularity_rating', data.get('rating'))  # accept the short key too
		return Movie(
			title=self._normalize_text(data.get('title')),
			director=self._normalize_text(data.get('director')),
			release_date=self._normalize_text(data.get('release_date')),
			popularity_rating=float(rating) if rating not in (None, '') else 0.0,
			description=self._normalize_text(data.get('description')),
		)

	def _normalize_text(self, text) -> str:
		"""
		Trim whitespace; handle None safely by returning empty string.
		Case is preserved because titles and directors are printed as-is.
		"""
		if not text:  # None or empty
			return ''  # normalize to empty
		return str(text).strip()  # standardized text
