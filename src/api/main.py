"""
FastAPI backend: REST API over waves, tracked contacts and their freshness ranking.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from heatwave.application import HeatwaveService, NoContactInfo, RankedContact
from heatwave.config import Settings, load_settings
from heatwave.domain import (
    SECONDS_PER_UNIT,
    UNSET,
    Contact,
    DuplicateWaveName,
    ExternalSourceUnavailable,
    TransactionFailure,
    Wave,
    WaveFields,
)
from heatwave.infrastructure import (
    Neo4jWaveContactRepository,
    build_service,
    ensure_constraints,
    load_external_sources,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _get_driver(settings: Settings):
    return GraphDatabase.driver(settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password))


def get_service(request: Request) -> HeatwaveService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Store is not configured")
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "service", None) is not None:
        yield
        return
    settings = load_settings()
    app.state.driver = None
    try:
        app.state.driver = _get_driver(settings)
        ensure_constraints(app.state.driver)
        directory, call_log = load_external_sources(settings)
        app.state.service = build_service(
            Neo4jWaveContactRepository(app.state.driver),
            directory,
            call_log,
            settings,
        )
        logger.info("Heatwave API ready (min call duration %ss)", settings.min_call_duration)
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


# --- REST models ---


class WaveBody(BaseModel):
    name: str
    days: int


class WavePatchBody(BaseModel):
    name: str | None = None
    days: int | None = None


class WaveItem(BaseModel):
    wave_id: str
    name: str
    days: float
    wavelength: int
    members: int = 0


class TrackBody(BaseModel):
    directory_id: str


class AssignWaveBody(BaseModel):
    wave_id: str | None = None


class SelectionBody(BaseModel):
    selected: list[str] = []
    deselected: list[str] = []


class ContactItem(BaseModel):
    directory_id: str
    name: str | None = None
    wave_id: str | None = None
    wave_name: str | None = None
    last_contact: int | None = None
    score: float | None = None
    overdue: bool = False


def _wave_item(service: HeatwaveService, wave: Wave) -> WaveItem:
    return WaveItem(
        wave_id=wave.id,
        name=wave.name,
        days=wave.days,
        wavelength=wave.wavelength,
        members=service.wave_member_count(wave),
    )


def _contact_item(contact: Contact, ranked: RankedContact | None = None) -> ContactItem:
    score = ranked.score if ranked else None
    # JSON has no infinity; a never-contacted contact is reported without a score but overdue.
    finite = score if score is not None and score != float("inf") else None
    return ContactItem(
        directory_id=contact.directory_id,
        name=contact.name,
        wave_id=contact.wave_id,
        wave_name=ranked.wave.name if ranked and ranked.wave else None,
        last_contact=contact.last_contact,
        score=finite,
        overdue=score is not None and score >= 1.0,
    )


def _require_wave(service: HeatwaveService, wave_id: str) -> Wave:
    wave = service.fetch_wave(wave_id)
    if wave is None:
        raise HTTPException(status_code=404, detail="Wave not found")
    return wave


def create_app(service: HeatwaveService | None = None) -> FastAPI:
    """Build the app. Pass a service to skip the Neo4j lifespan wiring (tests, scripts)."""
    app = FastAPI(title="Heatwave API", lifespan=lifespan)
    app.state.service = service

    @app.exception_handler(ExternalSourceUnavailable)
    async def external_unavailable(request: Request, exc: ExternalSourceUnavailable):
        logger.warning("External source unavailable: %s", exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(TransactionFailure)
    async def transaction_failure(request: Request, exc: TransactionFailure):
        logger.error("Transaction failed: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        # 422 means NoContactInfo only.
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    # --- REST: health ---

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # --- REST: waves ---

    @app.get("/waves")
    def list_waves(request: Request):
        service = get_service(request)
        return [_wave_item(service, w) for w in service.list_waves()]

    @app.post("/waves")
    def create_wave(body: WaveBody, request: Request):
        service = get_service(request)
        try:
            wave = service.create_or_get_wave(body.name, body.days * SECONDS_PER_UNIT)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return JSONResponse(content=_wave_item(service, wave).model_dump(), status_code=201)

    @app.get("/waves/{wave_id}")
    def get_wave(wave_id: str, request: Request):
        service = get_service(request)
        return _wave_item(service, _require_wave(service, wave_id))

    @app.patch("/waves/{wave_id}")
    def update_wave(wave_id: str, body: WavePatchBody, request: Request):
        service = get_service(request)
        wave = _require_wave(service, wave_id)
        fields = WaveFields(
            name=body.name if body.name is not None else UNSET,
            wavelength=body.days * SECONDS_PER_UNIT if body.days is not None else UNSET,
        )
        try:
            updated = service.modify_wave(wave, fields)
        except DuplicateWaveName as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _wave_item(service, updated)

    @app.delete("/waves/{wave_id}")
    def delete_wave(wave_id: str, request: Request):
        service = get_service(request)
        wave = _require_wave(service, wave_id)
        service.delete_wave(wave)
        return {"deleted": wave_id}

    # --- REST: contacts ---

    @app.get("/contacts")
    def list_contacts(request: Request, refresh: bool = False):
        service = get_service(request)
        return [_contact_item(r.contact, r) for r in service.ranked(refresh=refresh)]

    @app.post("/contacts")
    def track_contact(body: TrackBody, request: Request):
        service = get_service(request)
        try:
            contact = service.create_contact(body.directory_id)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        contact = service.fetch_contact(contact.directory_id)
        return JSONResponse(content=_contact_item(contact).model_dump(), status_code=201)

    @app.post("/contacts/selection")
    def update_selection(body: SelectionBody, request: Request):
        service = get_service(request)
        result = service.update_selection(body.selected, body.deselected)
        return {"succeeded": result.succeeded, "failed": result.failed}

    @app.delete("/contacts/{directory_id}")
    def untrack_contact(directory_id: str, request: Request):
        service = get_service(request)
        removed = service.delete_contact(directory_id)
        return {"directory_id": directory_id, "deleted": removed}

    @app.put("/contacts/{directory_id}/wave")
    def assign_wave(directory_id: str, body: AssignWaveBody, request: Request):
        service = get_service(request)
        try:
            contact = service.assign_wave(directory_id, body.wave_id)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if contact is None:
            raise HTTPException(status_code=404, detail="Contact not found")
        return _contact_item(contact)

    @app.post("/contacts/{directory_id}/refresh")
    def refresh_contact(directory_id: str, request: Request):
        service = get_service(request)
        contact = service.fetch_contact(directory_id)
        if contact is None:
            raise HTTPException(status_code=404, detail="Contact not found")
        last_contact = service.refresh_last_contact(contact)
        return {"directory_id": directory_id, "last_contact": last_contact}

    @app.get("/contacts/{directory_id}/dial")
    def dial_contact(directory_id: str, request: Request):
        service = get_service(request)
        if not service.is_tracked(directory_id):
            raise HTTPException(status_code=404, detail="Contact not found")
        target = service.dial_target(directory_id)
        if isinstance(target, NoContactInfo):
            raise HTTPException(status_code=422, detail="No phone number for this contact")
        return {"directory_id": directory_id, "number": target.number, "uri": target.uri}

    # --- REST: directory ---

    @app.get("/directory")
    def search_directory(request: Request, q: str | None = None):
        service = get_service(request)
        return [
            {"directory_id": c.directory_id, "name": c.name, "tracked": c.tracked}
            for c in service.search_directory(q)
        ]

    return app


app = create_app()
