"""
App setup, middleware, lifespan
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.errors import api_error_handler, request_validation_error_handler
from api.routes import admin, chat, root, speech
from core.config import settings
from core.exceptions import ApiError
from core.startup import cleanup_services, configure_logging, initialize_services

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic"""
    await initialize_services(app)
    try:
        yield
    finally:
        # shutdown
        await cleanup_services(app)


app = FastAPI(title="Humana API", version="0.1.0", lifespan=lifespan)


# Add CORS middleware
origins = [origin.strip() for origin in settings.web_origin.split(",") if origin.strip()] or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# Error envelope
app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Include routes
app.include_router(root.router)
app.include_router(chat.router)
app.include_router(speech.router)
app.include_router(admin.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
