# tcmchart/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tcmchart.config import get_settings
from tcmchart.db import init_db
from tcmchart.api.routes import router as api_router


logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = FastAPI(title="TCM Chart API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # single-clinic local deployment
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()


@app.get("/")
def root():
    return {"message": "TCM Chart API is running"}


app.include_router(api_router, prefix="/api")
