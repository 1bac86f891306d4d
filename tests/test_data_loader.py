"""
Tests for catalog loading: built-in movies, JSONL files, and record bounds.
"""

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from filmgate.catalog import Catalog
from filmgate.data_loader import DataLoader
from filmgate.errors import CatalogCapacityError
from filmgate.models import MAX_DESC_LEN, MAX_MOVIES, MAX_TITLE_LEN, Movie


def test_default_movies():
	movies = DataLoader().load_default_movies()
	assert len(movies) == 10
	assert movies[0].title == "How to Train Your Dragon"
	assert movies[0].popularity_rating == 92.5
	assert movies[-1].title == "The Girl with the Dragon Tattoo"


def test_jsonl_matches_builtin_dataset():
	loader = DataLoader()
	from_file = loader.load_movies_from_jsonl(str(ROOT / 'data' / 'movies.jsonl'))
	assert from_file == loader.load_default_movies()


def test_jsonl_skips_bad_lines(tmp_path):
	path = tmp_path / "movies.jsonl"
	good = {"title": "Alien", "director": "Ridley Scott", "release_date": "1979-05-25", "popularity_rating": 84, "description": "Space horror."}
	path.write_text("\n".join([
		json.dumps(good),
		"{not json",
		json.dumps({"title": "Bad rating", "popularity_rating": "high"}),
		"",
		json.dumps({"title": "Sparse"}),
	]), encoding="utf-8")

	movies = DataLoader().load_movies_from_jsonl(str(path))
	assert [m.title for m in movies] == ["Alien", "Sparse"]
	assert movies[0].popularity_rating == 84.0
	sparse = movies[1]
	assert sparse.director == "" and sparse.description == "" and sparse.popularity_rating == 0.0


def test_missing_file_raises(tmp_path):
	with pytest.raises(FileNotFoundError):
		DataLoader().load_movies_from_jsonl(str(tmp_path / "nope.jsonl"))


def test_load_catalog_default_and_file():
	loader = DataLoader()
	assert len(loader.load_catalog()) == 10
	assert len(loader.load_catalog(str(ROOT / 'data' / 'movies.jsonl'))) == 10


def test_movie_fields_truncated_and_never_none():
	movie = Movie("t" * 500, None, "2001-01-01T00:00:00.000", None, "d" * 1000)
	assert len(movie.title) == MAX_TITLE_LEN
	assert len(movie.description) == MAX_DESC_LEN
	assert movie.director == ""
	assert movie.popularity_rating == 0.0
	assert len(movie.release_date) == 19


def test_catalog_is_read_only_and_ordered():
	movies = DataLoader().load_default_movies()
	catalog = Catalog.from_movies(movies)
	assert list(catalog) == movies
	assert catalog.get(1).title == "Dragonheart"
	with pytest.raises(IndexError):
		catalog.get(10)
	with pytest.raises(TypeError):
		catalog[0] = movies[1]


def test_catalog_capacity():
	movies = [Movie(f"m{i}", "d", "2000", 1.0, "x") for i in range(MAX_MOVIES + 1)]
	with pytest.raises(CatalogCapacityError):
		Catalog(movies)
	assert len(Catalog(movies[:MAX_MOVIES])) == MAX_MOVIES
