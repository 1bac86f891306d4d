"""
FastAPI server exposing the gated movie search.
Endpoints:
- GET /health: basic health check
- GET /search?keyword=dragon: one search through the shared admission gate
- POST /batch: run a full concurrent batch and return the captured reports

Startup loads the catalog once (built-in movies, or FILMGATE_DATA_PATH).
"""

# Import standard libraries for timing and in-memory output capture
import io  # capture reports written by a batch run
from contextlib import asynccontextmanager  # startup/shutdown lifespan
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel, Field  # schema definitions

# Import our internal modules for loading, gating, and searching
from filmgate.catalog import Catalog  # immutable movie collection
from filmgate.concurrency import AdmissionGate  # bounded catalog access
from filmgate.config import SearchConfig  # defaults + environment overrides
from filmgate.data_loader import DataLoader  # loads movies
from filmgate.dispatcher import Dispatcher  # concurrent batch runner
from filmgate.errors import GateConfigurationError, GateTimeoutError  # bad slot counts, slot wait expiry
from filmgate.models import SearchRequest  # keyword bounding
from filmgate.report import ReportSink, format_report  # report rendering
from filmgate.search_engine import SearchEngine  # filter + rank

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger


# Globals set once at startup and shared read-only by request handlers
CONFIG: Optional[SearchConfig] = None  # runtime settings
CATALOG: Optional[Catalog] = None  # loaded movies
ENGINE: Optional[SearchEngine] = None  # lock-free search over CATALOG
GATE: Optional[AdmissionGate] = None  # limits concurrent /search bodies
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes a single ranked match
class MatchOut(BaseModel):
	position: int  # index in the catalog scan
	title: str
	director: str
	release_date: str
	rating: float


class SearchResponse(BaseModel):
	keyword: str  # keyword as searched
	matches: List[MatchOut]  # ranked matches
	dropped: int  # matches cut by the result cap
	elapsed_ms: float  # server-side time including the gate wait
	report: str  # rendered text block


class BatchRequest(BaseModel):
	keywords: List[str]  # one search per keyword
	slots: Optional[int] = None  # gate capacity for this batch
	delay_ms: Optional[int] = Field(default=None, ge=0)  # simulated load per search


class TaskOut(BaseModel):
	worker_id: int
	keyword: str
	state: str  # done or failed
	matches: int
	dropped: int
	error: Optional[str] = None


class BatchResponse(BaseModel):
	slots: int
	elapsed_ms: float
	peak_in_flight: int  # most searches ever inside the gate at once
	tasks: List[TaskOut]
	output: str  # every report and status line, in write order


# Lifespan hook: load the catalog once before serving
@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Load the catalog and build the shared engine and gate."""
	global CONFIG, CATALOG, ENGINE, GATE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	logger.info("[API] Startup: loading catalog...")  # log intent
	CONFIG = SearchConfig.from_env()
	CATALOG = DataLoader().load_catalog(CONFIG.data_path)
	ENGINE = SearchEngine(CATALOG, max_results=CONFIG.max_results)
	GATE = AdmissionGate(CONFIG.db_slots)

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(CATALOG)} movies and {CONFIG.db_slots} slots.")
	yield


# Instantiate the FastAPI application with metadata
app = FastAPI(title="Film Search Gate API", version="1.0.0", lifespan=lifespan)  # web app


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": CATALOG is not None,  # True if catalog loaded
		"catalog_size": len(CATALOG) if CATALOG is not None else 0,
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Sync handlers run in FastAPI's threadpool, so a blocked gate wait never stalls the event loop
@app.get("/search", response_model=SearchResponse)
def search(keyword: str = Query(..., description="Text to find in movie descriptions")):
	"""Run one search while holding a slot of the shared gate."""
	if ENGINE is None or GATE is None:  # startup must have completed
		logger.warning("[API] Search requested but catalog not loaded")
		raise HTTPException(status_code=503, detail="Catalog not loaded")

	request = SearchRequest(keyword=keyword, request_id=0)  # bounds the keyword like batch runs do
	start = time.time()  # includes the wait for a slot
	logger.debug(f"[API] /search keyword='{request.keyword}'")
	try:
		with GATE.slot(timeout=CONFIG.acquire_timeout_s):
			outcome = ENGINE.search(request.keyword)
	except GateTimeoutError as e:
		logger.warning(f"[API] /search gave up waiting for a slot: {e}")
		raise HTTPException(status_code=503, detail=str(e))
	elapsed_ms = (time.time() - start) * 1000
	logger.info(f"[API] /search served {outcome.count} matches in {elapsed_ms:.2f} ms")

	items = [
		MatchOut(
			position=r.position,
			title=r.movie.title,
			director=r.movie.director,
			release_date=r.movie.release_date,
			rating=r.rating,
		)
		for r in outcome.matches
	]
	report = "\n".join(format_report(outcome.keyword, outcome.matches)) + "\n"
	return SearchResponse(keyword=outcome.keyword, matches=items, dropped=outcome.dropped, elapsed_ms=round(elapsed_ms, 2), report=report)


@app.post("/batch", response_model=BatchResponse)
def batch(req: BatchRequest):
	"""Run one dispatcher batch with its own gate and an in-memory sink."""
	if CATALOG is None:
		raise HTTPException(status_code=503, detail="Catalog not loaded")

	slots = req.slots if req.slots is not None else CONFIG.db_slots
	try:
		config = CONFIG.with_overrides(db_slots=slots, work_delay_ms=req.delay_ms)
		gate = AdmissionGate(slots)
	except GateConfigurationError as e:
		raise HTTPException(status_code=422, detail=str(e))

	buffer = io.StringIO()  # captures reports in write order
	dispatcher = Dispatcher(CATALOG, gate=gate, sink=ReportSink(buffer), config=config, engine=ENGINE)
	summary = dispatcher.run(req.keywords)

	tasks = [
		TaskOut(
			worker_id=t.worker_id,
			keyword=t.keyword,
			state=t.state.value,
			matches=t.result.count if t.result else 0,
			dropped=t.result.dropped if t.result else 0,
			error=str(t.error) if t.error else None,
		)
		for t in summary.tasks
	]
	return BatchResponse(
		slots=slots,
		elapsed_ms=round(summary.elapsed_s * 1000, 2),
		peak_in_flight=gate.peak_in_flight,
		tasks=tasks,
		output=buffer.getvalue(),
	)
