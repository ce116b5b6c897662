from fastapi import APIRouter
from app.api.v1.endpoints import attendance, monitoring, employees, audit

api_router = APIRouter()

# Register routes
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(monitoring.router, prefix="/monitoring", tags=["Monitoring"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(audit.router, prefix="/audit", tags=["Audit"])
