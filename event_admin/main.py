from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from .db.database import init_db
from .logger import logger
from .routers import auth, events, user, users


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up and initializing the database...")
    await init_db()
    logger.info("Startup complete.")
    yield


api_app = FastAPI(root_path="/api")

api_app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_app.include_router(auth.router)
api_app.include_router(user.router)
api_app.include_router(users.router)
api_app.include_router(events.router)

app = FastAPI(lifespan=lifespan, title="Event Admin")
app.mount("/api", api_app)
