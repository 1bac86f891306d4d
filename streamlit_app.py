"""
Streamlit UI for the Film Search Gate.
Calls the local FastAPI server at http://localhost:8000 to run a concurrent batch,
or runs the dispatcher in-process when the API is unreachable.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# In-memory stream so local runs can show captured reports
import io  # capture dispatcher output
# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import Optional  # indicates values can be None

# Local imports for fallback/local mode (when API isn't used)
from filmgate.catalog import Catalog  # immutable movie collection
from filmgate.concurrency import AdmissionGate  # bounded catalog access
from filmgate.config import DEFAULT_KEYWORDS, SearchConfig  # defaults
from filmgate.data_loader import DataLoader  # load movies
from filmgate.dispatcher import Dispatcher  # concurrent batch runner
from filmgate.report import ReportSink  # serialized writer

# Default URL where the FastAPI server is expected to run locally
DEFAULT_API_URL = "http://localhost:8000"  # default API base URL

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Film Search Gate", layout="wide")  # wide layout

# Main page title
st.title("🎬 Film Search Gate – Concurrent Movie Keyword Search")  # friendly header

# Cache the catalog so we only load it once per session
@st.cache_resource(show_spinner=True)
def init_local_catalog() -> Optional[Catalog]:
	"""Load the catalog for local mode."""
	try:
		return DataLoader().load_catalog(SearchConfig.from_env().data_path)
	except (OSError, ValueError) as e:
		# Show an error in the UI so users know local mode failed
		st.error(f"Failed to load catalog: {e}")
		return None  # signal failure

# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	slots = st.slider("DB slots", min_value=1, max_value=10, value=5)  # gate capacity
	delay_ms = st.slider("Simulated load (ms)", min_value=0, max_value=1000, value=200, step=50)  # per-search delay
	api_url = st.text_input("API URL", DEFAULT_API_URL)  # where the API lives
	# Toggle to force local mode; if API health probe fails we also fall back to local
	use_local = st.toggle("Run locally", value=False, help="If enabled or API is unreachable, the batch runs in this process.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will run locally.")  # inform user

local_catalog: Optional[Catalog] = None  # placeholder
if use_local or not api_available:
	local_catalog = init_local_catalog()

# One keyword per line
keywords_text = st.text_area("Keywords (one per line)", value="\n".join(DEFAULT_KEYWORDS), height=200)
run_btn = st.button("Run searches", type="primary")  # triggers a batch

if run_btn:
	keywords = [k.strip() for k in keywords_text.splitlines() if k.strip()]
	with st.spinner(f"Running {len(keywords)} searches with {slots} slots..."):
		try:
			if local_catalog is not None:
				# Local mode: run the dispatcher inside this process
				buffer = io.StringIO()
				config = SearchConfig(db_slots=slots, work_delay_ms=delay_ms)
				gate = AdmissionGate(slots)
				summary = Dispatcher(local_catalog, gate=gate, sink=ReportSink(buffer), config=config).run(keywords)
				payload = {
					"elapsed_ms": round(summary.elapsed_s * 1000, 2),
					"peak_in_flight": gate.peak_in_flight,
					"tasks": [{"worker_id": t.worker_id, "keyword": t.keyword, "state": t.state.value,
						"matches": t.result.count if t.result else 0} for t in summary.tasks],
					"output": buffer.getvalue(),
				}
			else:
				# API mode: the server runs the batch
				resp = requests.post(f"{api_url}/batch", json={"keywords": keywords, "slots": slots, "delay_ms": delay_ms}, timeout=120)
				resp.raise_for_status()  # raise error if server responded with an error code
				payload = resp.json()  # parse JSON returned by API

			st.success(f"{len(payload['tasks'])} searches finished in {payload['elapsed_ms']} ms (peak concurrency {payload['peak_in_flight']})")
			st.dataframe(payload["tasks"], use_container_width=True)  # per-task summary
			st.code(payload["output"], language="text")  # reports exactly as written

		except requests.RequestException as e:  # network/API errors
			st.error(f"API request failed: {e}")  # show human-friendly message

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if local_catalog is not None:
	st.sidebar.caption("Mode: Local dispatcher")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --reload is running)")  # mode label
