from fastapi import APIRouter

from runtracker.api.endpoints import auth, machines

api_router = APIRouter(prefix="/api")
api_router.include_router(machines.router)
api_router.include_router(auth.router)
