import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import get_settings
from app.database import init_db
from app.exceptions import DomainError, domain_error_handler
from app.rate_limit import limiter
from app.auth.router import router as auth_router
from app.media.router import router as media_router
from app.messaging.router import router as messaging_router
from app.posts.router import router as posts_router
from app.profile.router import router as profile_router
from app.social_graph.router import friends_router, router as social_router
from shared.middleware.request_id import request_id_middleware
from shared.middleware.error_handler import error_envelope_middleware

logger = logging.getLogger(__name__)


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## SocialWorld Social Service

Everything behind the SocialWorld app:

* **Authentication** — email + username + password sign-up, 4-digit emailed
  verification code, JWT access tokens.
* **Profiles** — own profile with media gallery, username search, other users'
  profiles (redacted when private unless you are friends).
* **Social graph** — follows (public profiles only) and friend requests;
  accepting a request makes both users follow each other.
* **Messages** — direct messages. Private profiles only accept messages from
  friends or from people they already have a conversation with.
* **Posts** — public feed, comments and likes.
* **Media** — presigned S3 PUT URLs for direct image / video upload.

### Authentication
All protected endpoints require:
```
Authorization: Bearer <access_token>
```

### Error shape
Domain errors return a consistent JSON envelope:
```json
{ "error": { "code": "already_following", "message": "..." }, "request_id": "..." }
```
Validation errors (`422`) return the standard Pydantic error list under `detail`.

### Rate limits
`429 Too Many Requests` is returned when a rate limit is exceeded.
"""

_TAGS_METADATA = [
    {"name": "auth", "description": "Registration, email verification and login."},
    {
        "name": "profile",
        "description": (
            "`GET /users/me` returns the caller's full profile. "
            "`GET /users/profile/{username}` returns another user's profile, "
            "redacted when it is private and the caller is not a friend."
        ),
    },
    {
        "name": "social-graph",
        "description": "Follow / unfollow public users and check follow status.",
    },
    {
        "name": "friends",
        "description": (
            "Friend requests by username. Accepting creates follow edges in both "
            "directions. A request can be answered only once."
        ),
    },
    {"name": "messages", "description": "Direct messages and conversation list."},
    {"name": "posts", "description": "Posts, comments and likes."},
    {"name": "media", "description": "Presigned S3 upload URLs for images and videos."},
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.social_database_url)
    logger.info("Social service started (%s)", settings.env_name)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="SocialWorld Social Service",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(DomainError, domain_error_handler)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # CORS must be outermost so ALL responses (including 429s) carry CORS headers.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(profile_router, prefix="/api/v1")
    app.include_router(social_router, prefix="/api/v1")
    app.include_router(friends_router, prefix="/api/v1")
    app.include_router(messaging_router, prefix="/api/v1")
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(media_router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["health"], include_in_schema=True)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="social")

    return app


app = create_app()
