"""Ansible Tower / AWX API client."""

from .api import Api, HttpResponse
from .collection import Collection
from .config import Config, load_config
from .connection import Connection
from .exceptions import (
    ApiError,
    ParseError,
    ResourceNotFound,
    TowerClientError,
    TowerConnectionError,
)
from .extra_vars import ExtraVars
from .record import Record
from .resources import AdHocCommand, Group, Host, Inventory, Job, JobTemplate, Resource

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AdHocCommand",
    "Api",
    "ApiError",
    "Collection",
    "Config",
    "Connection",
    "ExtraVars",
    "Group",
    "Host",
    "HttpResponse",
    "Inventory",
    "Job",
    "JobTemplate",
    "ParseError",
    "Record",
    "Resource",
    "ResourceNotFound",
    "TowerClientError",
    "TowerConnectionError",
    "load_config",
]
