from fastapi import APIRouter

from app.api.v1.endpoints import auth, backup, employees, generation, health, stats

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(employees.router)
api_router.include_router(stats.router)
api_router.include_router(backup.router)
api_router.include_router(generation.router)
