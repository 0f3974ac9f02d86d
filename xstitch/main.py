import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.admin import router as admin_router
from .api.patterns import router as patterns_router
from .settings import DATA_DIR, LOG_LEVEL, STORAGE_BACKEND

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Cross-Stitch Pattern Service")

# Uploaded source images are served straight from disk on the fs backend
if STORAGE_BACKEND.lower() != "s3":
    uploads_dir = Path(DATA_DIR) / "uploads"
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(patterns_router, prefix="/api", tags=["patterns"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
