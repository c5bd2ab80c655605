from typing import Any
from structlog import get_logger

from .api import Api
from .collection import Collection
from .config import Config
from .resources import (
    RESOURCE_TYPES,
    AdHocCommand,
    Group,
    Host,
    Inventory,
    Job,
    JobTemplate,
    Resource,
)

log = get_logger()


class Connection:
    """
    Entry point: one ``Collection`` per resource type over a shared ``Api``.
    """

    def __init__(self, api: Api):
        self.api = api

    @classmethod
    def from_config(cls, config: Config) -> "Connection":
        log.debug("connecting", base_url=config.base_url, username=config.username)
        return cls(
            Api(
                config.base_url,
                username=config.username,
                password=config.password,
                verify_ssl=config.verify_ssl,
                timeout=config.timeout,
                retries=config.retries,
            )
        )

    def __repr__(self) -> str:
        return f"Connection({self.api.base_url})"

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.api.close()

    def collection(self, endpoint: str) -> Collection[Resource]:
        try:
            klass = RESOURCE_TYPES[endpoint]
        except KeyError:
            raise ValueError(
                f"unknown resource {endpoint!r}; expected one of {sorted(RESOURCE_TYPES)}"
            )
        return Collection(self.api, klass)

    @property
    def job_templates(self) -> Collection[JobTemplate]:
        return Collection(self.api, JobTemplate)

    @property
    def jobs(self) -> Collection[Job]:
        return Collection(self.api, Job)

    @property
    def inventories(self) -> Collection[Inventory]:
        return Collection(self.api, Inventory)

    @property
    def hosts(self) -> Collection[Host]:
        return Collection(self.api, Host)

    @property
    def groups(self) -> Collection[Group]:
        return Collection(self.api, Group)

    @property
    def ad_hoc_commands(self) -> Collection[AdHocCommand]:
        return Collection(self.api, AdHocCommand)
