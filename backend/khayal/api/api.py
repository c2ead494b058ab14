from fastapi import APIRouter

from khayal.api.endpoints import audit_logs, auth, contact, members, password_reset, performances

api_router = APIRouter()
api_router.include_router(contact.router, tags=["contact"])
api_router.include_router(auth.router, prefix="/admin", tags=["auth"])
api_router.include_router(password_reset.router, prefix="/admin/reset-password", tags=["auth"])
api_router.include_router(members.router, prefix="/members", tags=["members"])
api_router.include_router(members.admin_router, prefix="/admin/members", tags=["members"])
api_router.include_router(performances.router, prefix="/performances", tags=["performances"])
api_router.include_router(performances.admin_router, prefix="/admin/performances", tags=["performances"])
api_router.include_router(audit_logs.router, prefix="/admin/audit-logs", tags=["audit-logs"])
