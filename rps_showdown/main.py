# rps_showdown/main.py
"""
RPS Showdown - FastAPI Application
Single-screen Rock-Paper-Scissors against a uniformly random computer, with a
persisted running score.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from rps_showdown import __version__
from rps_showdown.routes.health import router as health_router
from rps_showdown.routes.game import router as game_router
from rps_showdown.metrics import initialize_all_metrics
from rps_showdown.state_machine import get_game

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---- FastAPI App Initialization
app = FastAPI(
    title="RPS Showdown",
    description="Rock-paper-scissors against the computer with a persistent score",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ---- Middleware Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Prometheus Instrumentation
Instrumentator(
    should_respect_env_var=True,
    excluded_handlers=["/metrics"],
).instrument(app).expose(app, include_in_schema=False, should_gzip=True)

# ---- Router Registration
app.include_router(health_router, tags=["Health"])
app.include_router(game_router, tags=["Game Flow"])


# ---- Startup / Shutdown
@app.on_event("startup")
async def startup_event():
    """Initialize metrics and load the persisted score"""
    initialize_all_metrics()
    game = get_game()
    print(f"✅ Score loaded: {game.score.player}-{game.score.computer}")


@app.on_event("shutdown")
async def shutdown_event():
    get_game().close()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
