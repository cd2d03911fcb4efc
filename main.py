from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from dotenv import load_dotenv

from db import Base, engine
import recruiting.models  # noqa: F401  registers tables on Base.metadata
from recruiting.logic.school_matching import SchoolMatchCache
from recruiting.routes import router as recruiting_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting with DATABASE_URL")

app = FastAPI(title="Recruiting Decision Support")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

# One matching cache for the life of the process; cleared on restart
app.state.match_cache = SchoolMatchCache()

app.include_router(recruiting_router)


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
