from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.alerts import router as alerts_router
from api.upload import router as upload_router
from alerts import get_alert_engine
from logging_config import setup_logging

logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_alert_engine()
    logger.info("Alert engine ready (diesel critical < %s L)", engine.config.stock.diesel_critical)
    yield

app = FastAPI(
    title="Fleet Alerts API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(alerts_router, prefix="/api")
app.include_router(upload_router, prefix="/api")

@app.get("/")
async def root():
    return {
        "name": "Fleet Alerts API",
        "version": "1.0.0",
        "docs": "/docs",
    }

@app.get("/health")
async def health():
    engine = get_alert_engine()

    return {
        "status": "healthy",
        "engine": {
            "config": engine.config.to_dict(),
        },
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
