from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers import reservations
from app.config import settings
from app.services.reservation_store import ReservationStore
from app.utils.logging_config import setup_logging
from app.middleware.logging_middleware import log_requests


logger = setup_logging()
logger.info("Application starting...")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = ReservationStore.from_settings(settings)
    app.state.reservation_store = store
    await store.fetch_all()
    yield
    logger.info("Application stopping...")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reservations.router)

@app.get("/")
def root() -> dict:
        return {"message": "Reservierungssystem läuft!", "app": settings.app_name}

@app.get("/health")
def health() -> dict:
        return {"status": "ok", "demo_mode": settings.is_demo_mode}
