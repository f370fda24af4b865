from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from houseledger.core.config import settings
from houseledger.core.logging_config import configure_logging
from houseledger.db.mongo import connect_to_mongo, close_mongo_connection
from houseledger.api.v1.api import api_router

configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Welcome to House Ledger API"}

app.include_router(api_router, prefix=settings.API_V1_STR)


def run():
    """Serve the API with uvicorn (`houseledger` console script)."""
    uvicorn.run(
        "houseledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
