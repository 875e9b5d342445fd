from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from threadline.core.config import settings
from threadline.middleware.request_logging import RequestLoggingMiddleware
from threadline.middleware.auth_logging import AuthLoggingMiddleware
from threadline.modules.auth.api.router import router as auth_router
from threadline.modules.follows.api.router import router as follows_router
from threadline.modules.user_management.api.router import router as user_router
from threadline.modules.posts.api.router import router as posts_router
from threadline.modules.posts.comments.api.router import router as comments_router
from threadline.modules.posts.reposts.api.router import router as reposts_router
from threadline.modules.notifications.api.router import router as notifications_router
from threadline.modules.home_feed.api.router import router as home_feed_router
from threadline.modules.messaging.api.router import router as conversations_router
from threadline.modules.messaging.api.socket import router as socket_router
from threadline.modules.media.router import router as media_router
from threadline.db.init_db import create_all_tables

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("threadline")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    exception_handlers={
        RequestValidationError: request_validation_exception_handler,
        HTTPException: http_exception_handler,
    },
    debug=settings.DEBUG,
    description="Social feed backend with posts, reposts, follows, notifications and direct messages",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    logger.info(f"BASE_URL: {settings.BASE_URL}")

    create_all_tables()

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Server error"})

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(AuthLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(auth_router, prefix=f"{settings.API_PREFIX}/auth", tags=["authentication"])
app.include_router(follows_router, prefix=f"{settings.API_PREFIX}/auth", tags=["follows"])
# Registered before the users router so /{user_id} does not capture "conversations"
app.include_router(conversations_router, prefix=f"{settings.API_PREFIX}/users/conversations", tags=["conversations"])
app.include_router(user_router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])
app.include_router(posts_router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])
app.include_router(comments_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/comments", tags=["comments"])
app.include_router(reposts_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/repost", tags=["reposts"])
app.include_router(notifications_router, prefix=f"{settings.API_PREFIX}/notifications", tags=["notifications"])
app.include_router(home_feed_router, prefix=f"{settings.API_PREFIX}/feed", tags=["home feed"])
app.include_router(media_router)
app.include_router(socket_router)

@app.get("/")
async def root():
    return {
        "message": "Welcome to Threadline",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs" if settings.DEBUG else None,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("threadline.main:app", host="0.0.0.0", port=5001, reload=True)
