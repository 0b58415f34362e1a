from fastapi import Request

from ...config import Settings
from ...core.roles import RoleCatalog
from ...managers.session import SessionLifecycleManager


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> RoleCatalog:
    return request.app.state.catalog


def get_manager(request: Request) -> SessionLifecycleManager:
    return request.app.state.manager
