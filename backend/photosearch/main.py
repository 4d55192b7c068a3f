from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from photosearch.routes.search import router as search_router
from photosearch.routes.ingest import router as ingest_router
from photosearch.observability import setup_logging
import os

setup_logging()

app = FastAPI(title="Photo Search API")

# Search responses must be readable cross-origin
allow_origins = os.getenv("API_CORS_ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search_router)
app.include_router(ingest_router)

@app.get("/health")
def health():
    return {"status": "ok"}
