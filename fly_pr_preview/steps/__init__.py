from .configure import AttachDatabase, ConfigureHost, RestoreConfig
from .deploy import DeployApp, ImportSecrets
from .ensure_app import EnsureApp, create_app
from .init import InitPreview
from .report import ReportStatus
from .scale import ScaleApp
from .teardown import TeardownPreview, destroy_app, detach_postgres
from .types import PreviewContext, allow_fail

__all__ = [
    "AttachDatabase",
    "ConfigureHost",
    "DeployApp",
    "EnsureApp",
    "ImportSecrets",
    "InitPreview",
    "PreviewContext",
    "ReportStatus",
    "RestoreConfig",
    "ScaleApp",
    "TeardownPreview",
    "allow_fail",
    "create_app",
    "destroy_app",
    "detach_postgres",
]
