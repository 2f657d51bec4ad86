# File: app/main.py
# Project: city-fix-backend

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import cors_origins_list, settings
from app.core.errors import AppError, app_error_handler, store_error_handler
from app.core.logging import configure_logging
from app.core.ratelimit import limiter
from app.routers import issues, issues_stats, public, users, staff, uploads
from app.services.quota import check_tier_table

configure_logging(settings)
check_tier_table()

app = FastAPI(title="City Fix API")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(SQLAlchemyError, store_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def root():
    return {"message": "City Fix is running"}

@app.get("/health")
def health():
    return {"ok": True}

app.include_router(issues_stats.router)
app.include_router(issues.router)
app.include_router(public.router)
app.include_router(users.router)
app.include_router(staff.router)
app.include_router(uploads.router)
