from fastapi import APIRouter

# Auth
from cinema.api.v1.public.auth import router as auth_router

# Public - halls and reservations
from cinema.api.v1.public.halls import router as halls_router
from cinema.api.v1.public.reservations import router as reservations_router

# Admin
from cinema.api.v1.admin.halls import router as admin_halls_router
from cinema.api.v1.admin.users import router as admin_users_router

api_router = APIRouter()

# --- Auth ---
api_router.include_router(auth_router)

# --- Public ---
api_router.include_router(halls_router)
api_router.include_router(reservations_router)

# --- Admin ---
api_router.include_router(admin_halls_router)
api_router.include_router(admin_users_router)
