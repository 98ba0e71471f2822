# main.py
import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

from edithub.core.config import settings
from edithub.core.database import engine, Base, SessionLocal
from edithub.core.errors import EditHubError, STORE_UNAVAILABLE
from edithub.core.roles import parse_role

from edithub.api.access_api import router as access_router
from edithub.api.videos_api import router as videos_router
from edithub.api.feedback_api import router as feedback_router
from edithub.api.groups_api import router as groups_router
from edithub.api.clients_api import router as clients_router
from edithub.api.codes_api import router as codes_router
from edithub.api.profiles_api import router as profiles_router
from edithub.services.realtime import notifier
from edithub.services.session import SessionHolder

# models must be imported before create_all
import edithub.models  # noqa: F401
from edithub.models.access_code import AccessCode

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("edithub")

app = FastAPI(title="EditHub Video Portal")

# -------------------------
# DB init
# -------------------------
Base.metadata.create_all(bind=engine)


# Forgeable, local development only
DEV_SESSION_SECRET = "dev-secret-change-me"


class AuthGuardMiddleware(BaseHTTPMiddleware):
    # Reachable without an access-code session
    PUBLIC_API_PATHS = (
        "/api/access/sign-in",
        "/api/access/sign-out",
        "/api/profiles/",
    )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        request.state.identity = SessionHolder(request.session).current()

        if path.startswith("/api") and not any(path.startswith(p) for p in self.PUBLIC_API_PATHS):
            if request.state.identity is None:
                return JSONResponse({"detail": "Not authenticated"}, status_code=401)

        return await call_next(request)


# IMPORTANT: SessionMiddleware must be outermost (added LAST)
app.add_middleware(AuthGuardMiddleware)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET or DEV_SESSION_SECRET,
    max_age=60 * 60 * 24 * settings.AUTH_REMEMBER_DAYS,
    same_site="lax",
    https_only=settings.COOKIE_SECURE,
)


# -------------------------
# Errors
# -------------------------
@app.exception_handler(EditHubError)
async def edithub_error_handler(request: Request, exc: EditHubError):
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse({"detail": STORE_UNAVAILABLE, "retryable": True}, status_code=503)


# -------------------------
# Bootstrap
# -------------------------
def bootstrap_admin_code(db: Session) -> AccessCode | None:
    code = (settings.BOOTSTRAP_ADMIN_CODE or "").strip()
    if not code:
        logger.info("[BOOTSTRAP] No BOOTSTRAP_ADMIN_CODE. Admin code not created.")
        return None

    if db.query(AccessCode).count() > 0:
        logger.info("[BOOTSTRAP] Access codes already exist. Skip admin code.")
        return None

    role = parse_role(settings.BOOTSTRAP_ADMIN_ROLE)
    if role is None or not role.is_elevated:
        logger.warning(f"[BOOTSTRAP] BOOTSTRAP_ADMIN_ROLE={settings.BOOTSTRAP_ADMIN_ROLE!r} is not an admin role")
        return None

    row = AccessCode(code=code, role=role.value, is_active=True)
    db.add(row)
    db.commit()
    logger.info(f"[BOOTSTRAP] {role.value} access code created")
    return row


def check_session_secret() -> bool:
    if settings.SESSION_SECRET:
        return True
    logger.warning(
        "[SECURITY] SESSION_SECRET is not set. Sessions are signed with a public "
        "development key and can be forged. Set SESSION_SECRET before deploying."
    )
    return False


@app.on_event("startup")
def on_startup():
    check_session_secret()
    db = SessionLocal()
    try:
        bootstrap_admin_code(db)
    finally:
        db.close()


app.include_router(access_router, prefix="/api")
app.include_router(feedback_router, prefix="/api")
app.include_router(videos_router, prefix="/api")
app.include_router(groups_router, prefix="/api")
app.include_router(clients_router, prefix="/api")
app.include_router(codes_router, prefix="/api")
app.include_router(profiles_router, prefix="/api")


@app.websocket("/ws/catalog")
async def catalog_ws(ws: WebSocket):
    if SessionHolder(ws.session).current() is None:
        await ws.close(code=4401)
        return

    await notifier.connect(ws)
    try:
        while True:
            # client pings are ignored, the socket only carries notifications
            await ws.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await notifier.disconnect(ws)


@app.get("/health")
def health():
    return {"status": "ok"}
