from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
from fastapi.responses import JSONResponse

from app.config import LOG_LEVEL

# Configure base logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("app")

from app import models  # noqa: F401  registra los modelos en Base
from app.routers import games, players, chats, claims
from app.database import engine, Base
from app.errors import RepositoryError
import uvicorn

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Lue Lue API",
    description="API for persisting card games, players, chats and claims",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(games.router, prefix="/api/game", tags=["games"])
app.include_router(players.router, prefix="/api/players")
app.include_router(chats.router, prefix="/api/chats")
app.include_router(claims.router, prefix="/api/claims")


@app.get("/")
def read_root():
    return {"message": "Welcome to Lue Lue API"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=3000, reload=True)


# Repository errors -> status code and body carried by the error
@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    if exc.status_code >= 500:
        logger.error(
            "Repository error | path=%s | method=%s | %s",
            request.url.path,
            request.method,
            exc,
        )
    else:
        logger.info("Repository error | path=%s | %s", request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Global unhandled exception handler -> logs ERROR
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
