# main.py
# FastAPI app exposing the explorer's query state + actions to the UI as JSON

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from models import Status
from providers.catalog import CatalogClient
from state import QueryController
from utils import filter_options, loading_placeholders, to_card

load_dotenv()

# logging
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("attraction-explorer")

# config / env (read once here, handed to the client explicitly)
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
CATALOG_TIMEOUT_S = float(os.getenv("CATALOG_TIMEOUT_S", "20"))

# CORS origins
FRONTEND_LOCAL = "http://localhost:5173"
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "")


class FilterUpdate(BaseModel):
    field: str
    value: Optional[str] = None


def render_state(ctl: QueryController) -> dict:
    """What the page renders from: cards (or skeletons while loading), status, filters."""
    st = ctl.state
    loading = st.status is Status.LOADING
    return {
        "status": st.status.value,
        "error": st.error_message,
        "filters": {
            "q": st.filters.q or "",
            "category": st.filters.category or "",
            "location": st.filters.location or "",
        },
        "items": [] if loading else [to_card(it).model_dump() for it in st.items],
        "placeholders": loading_placeholders() if loading else [],
        "has_data": st.has_data,
        "offer_seed": st.is_empty,
        "options": filter_options(),
    }


def create_app(client: Optional[CatalogClient] = None) -> FastAPI:
    catalog = client or CatalogClient(BACKEND_URL, timeout=CATALOG_TIMEOUT_S)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # one session per process: build the controller and run the initial load
        log.info("catalog at %s", catalog.base_url)
        app.state.controller = await QueryController.create(catalog)
        yield

    app = FastAPI(title="Attraction Explorer", version="0.1.0", lifespan=lifespan)

    origins = [FRONTEND_LOCAL]
    if FRONTEND_ORIGIN:
        origins.append(FRONTEND_ORIGIN)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # global JSON error handling
    # - HTTPException -> { "error": <detail> }
    # - any other exception -> { "error": "Server error" }
    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        log.warning("HTTP %s: %s", exc.status_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log.exception("Unhandled exception")
        return JSONResponse(status_code=500, content={"error": "Server error"})

    def controller(request: Request) -> QueryController:
        return request.app.state.controller

    @app.get("/state")
    async def get_state(request: Request):
        return render_state(controller(request))

    @app.put("/filters")
    async def put_filter(req: FilterUpdate, request: Request):
        ctl = controller(request)
        try:
            ctl.update_filter(req.field, req.value)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return render_state(ctl)

    @app.post("/search")
    async def post_search(request: Request):
        ctl = controller(request)
        await ctl.search()
        return render_state(ctl)

    @app.post("/seed")
    async def post_seed(request: Request):
        """Load the sample set (meant for an empty catalog) and refresh."""
        ctl = controller(request)
        outcome = await ctl.seed_and_refresh()
        rep = outcome.report
        return {
            **render_state(ctl),
            "seed": {
                "created": len(rep.created),
                "skipped": len(rep.skipped),
                "failed": rep.failed.name if rep.failed else None,
            },
        }

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
