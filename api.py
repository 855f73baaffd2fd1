"""
FastAPI server exposing the movie catalog API.
Endpoints:
- GET /health: basic health check
- GET /api/genres: all genres in id order
- GET /api/movies/popular?page=1 and /api/movies/top-rated?page=1: ranked listings
- GET /api/movies/search?query=...&page=1: title/overview substring search
- GET /api/movies/by-genre/{genre_id}?page=1: genre listing
- GET /api/movies/{movie_id} and /api/movies/{movie_id}/similar: details and similar movies
- GET /api/recommendations?genre_ids=..&exclude_ids=..&page=1: personalized feed

Startup loads the dataset once (REELBASE_DATA_PATH, default data/movies.json).
A broken dataset aborts startup; the server never serves a partial catalog.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Path, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions
from dotenv import load_dotenv  # optional .env support for settings

# Import our internal modules for configuration and catalog access
from reelbase.config import Settings, configure_logging  # env-driven settings
from reelbase.data_loader import DatasetError  # fatal dataset problems
from reelbase.models import Movie  # catalog record
from reelbase.service import MovieService  # catalog facade
from reelbase.utils import image_url  # poster path resolution

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Reelbase Movie API", version="1.0.0")  # web app

# Globals that hold the service instance and measured startup time
SERVICE: Optional[MovieService] = None  # set once the catalog is loaded
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class GenreOut(BaseModel):
	id: int  # registry id
	name: str  # display name


class CastMemberOut(BaseModel):
	id: int  # position in the cast list
	name: str  # actor name
	character: str  # placeholder character name
	profile_path: Optional[str] = None  # always empty in this dataset


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int  # catalog id
	title: str  # display title
	overview: str  # synopsis, may be empty
	poster_path: Optional[str] = None  # raw poster path from the dataset
	poster_url: str  # resolved URL (placeholder when missing)
	backdrop_path: Optional[str] = None  # never present
	release_date: str  # YYYY-01-01
	vote_average: float  # synthetic
	vote_count: int  # synthetic
	popularity: float  # synthetic
	runtime: int  # synthetic, minutes
	adult: bool  # always false
	genre_ids: List[int]  # ordered genre ids
	genres: List[GenreOut]  # ids with names
	cast: List[CastMemberOut]  # ordered cast


def _to_movie_out(m: Movie) -> MovieOut:
	"""Convert a catalog Movie into the response schema."""
	return MovieOut(
		id=m.id,
		title=m.title,
		overview=m.overview,
		poster_path=m.poster_path,
		poster_url=image_url(m.poster_path),
		backdrop_path=m.backdrop_path,
		release_date=m.release_date,
		vote_average=m.vote_average,
		vote_count=m.vote_count,
		popularity=m.popularity,
		runtime=m.runtime,
		adult=m.adult,
		genre_ids=list(m.genre_ids),
		genres=[GenreOut(id=g.id, name=g.name) for g in m.genres],
		cast=[
			CastMemberOut(id=c.id, name=c.name, character=c.character, profile_path=c.profile_path)
			for c in m.cast
		],
	)


def _service() -> MovieService:
	"""Return the loaded service, or refuse the request until startup has finished."""
	if SERVICE is None:  # catalog must be ready to serve
		logger.warning("[API] Request received before the catalog finished loading")  # guard log
		raise HTTPException(status_code=503, detail="Catalog not loaded")
	return SERVICE


# FastAPI startup hook to load the catalog once
@app.on_event("startup")
async def startup_event():
	"""Load the dataset and build the catalog before serving anything."""
	global SERVICE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	load_dotenv()  # pick up a local .env if present
	settings = Settings.from_env()  # read configuration
	configure_logging(settings.log_level)  # apply log level

	logger.info(f"[API] Startup: loading catalog from {settings.data_path} (seed={settings.seed})")  # log intent
	try:
		SERVICE = MovieService.from_file(settings.data_path, seed=settings.seed)  # build catalog
	except DatasetError as e:
		logger.error(f"[API] Cannot start: {e}")  # fatal, no partial catalog
		raise

	# Compute and log startup duration
	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": SERVICE is not None,  # True once the dataset is loaded
		"movies": len(SERVICE.snapshot.catalog) if SERVICE is not None else 0,  # catalog size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/api/genres", response_model=List[GenreOut])
async def genres():
	"""All genres, in the order they were first seen in the dataset."""
	return [GenreOut(id=g.id, name=g.name) for g in _service().fetch_genres()]


@app.get("/api/movies/popular", response_model=List[MovieOut])
async def popular_movies(page: int = Query(1, ge=1)):
	movies = _service().fetch_popular_movies(page)
	logger.debug(f"[API] /api/movies/popular page={page} -> {len(movies)}")
	return [_to_movie_out(m) for m in movies]


@app.get("/api/movies/top-rated", response_model=List[MovieOut])
async def top_rated_movies(page: int = Query(1, ge=1)):
	movies = _service().fetch_top_rated_movies(page)
	logger.debug(f"[API] /api/movies/top-rated page={page} -> {len(movies)}")
	return [_to_movie_out(m) for m in movies]


@app.get("/api/movies/search", response_model=List[MovieOut])
async def search_movies(
	query: str = Query(..., description="Text to find in titles and overviews"),
	page: int = Query(1, ge=1),
):
	"""Substring search; a blank query simply returns no movies."""
	start = time.time()  # start timer
	movies = _service().search_movies(query, page)  # run search
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /api/movies/search q='{query}' page={page} served {len(movies)} in {elapsed_ms:.2f} ms")
	return [_to_movie_out(m) for m in movies]


@app.get("/api/movies/by-genre/{genre_id}", response_model=List[MovieOut])
async def movies_by_genre(genre_id: int = Path(...), page: int = Query(1, ge=1)):
	movies = _service().fetch_movies_by_genre(genre_id, page)
	logger.debug(f"[API] /api/movies/by-genre/{genre_id} page={page} -> {len(movies)}")
	return [_to_movie_out(m) for m in movies]


@app.get("/api/movies/{movie_id}", response_model=MovieOut)
async def movie_details(movie_id: int = Path(...)):
	movie = _service().fetch_movie_details(movie_id)
	if movie is None:  # unknown id is an expected miss
		raise HTTPException(status_code=404, detail="Movie not found")
	return _to_movie_out(movie)


@app.get("/api/movies/{movie_id}/similar", response_model=List[MovieOut])
async def similar_movies(movie_id: int = Path(...)):
	"""Up to 20 movies sharing genres; an unknown id yields an empty list."""
	movies = _service().fetch_similar_movies(movie_id)
	logger.debug(f"[API] /api/movies/{movie_id}/similar -> {len(movies)}")
	return [_to_movie_out(m) for m in movies]


@app.get("/api/recommendations", response_model=List[MovieOut])
async def recommendations(
	genre_ids: List[int] = Query([], description="Preferred genre ids (any overlap)"),
	exclude_ids: List[int] = Query([], description="Movie ids to leave out, e.g. already rated"),
	page: int = Query(1, ge=1),
):
	"""
	Personalized feed. The caller resolves the user's preferred genres and rated
	movies; with no genres this is the popularity listing minus exclusions.
	"""
	movies = _service().fetch_recommendations(set(genre_ids), set(exclude_ids), page)
	logger.info(
		f"[API] /api/recommendations genres={sorted(set(genre_ids))} excluded={len(set(exclude_ids))} page={page} -> {len(movies)}"
	)
	return [_to_movie_out(m) for m in movies]
