from typing import Any, Mapping, TypeVar
from structlog import get_logger

from ._utils import load_json
from .api import Api
from .exceptions import ParseError
from .extra_vars import ExtraVars
from .record import Record

log = get_logger()

R = TypeVar("R", bound="Resource")


class Resource(Record):
    """
    Record bound to an API endpoint.

    Subclasses set ``endpoint`` to the path segment of their resource
    category, e.g. ``"job_templates"``.
    """

    endpoint: str = ""

    def __init__(self, api: Api, data: str | bytes | Mapping | None = None):
        self.api = api
        super().__init__(data)

    @classmethod
    def find(cls: type[R], api: Api, id: int | str) -> R:
        return cls(api, api.get(f"{cls.endpoint}/{id}/").body)

    @classmethod
    def collection_for(cls: type[R], api: Api, body: str | bytes) -> list[R]:
        """
        Wrap a JSON array, or the ``results`` of a paginated page, in API order.
        """
        document = load_json(body)
        if isinstance(document, dict) and "results" in document:
            document = document["results"]
        if not isinstance(document, list):
            raise ParseError(f"expected a JSON array, got {type(document).__name__}")
        return [cls(api, item) for item in document]

    @property
    def detail_url(self) -> str:
        if "url" in self:
            return self["url"]
        return f"{self.endpoint}/{self['id']}/"

    def _sub_collection(self, cls: type[R], name: str) -> list[R]:
        response = self.api.get(f"{self.endpoint}/{self['id']}/{name}/")
        return cls.collection_for(self.api, response.body)


class Job(Resource, exclude=("extra_vars",)):
    endpoint = "jobs"

    def relaunch(self) -> "Job":
        response = self.api.post(f"{self.detail_url}relaunch/")
        job = Job(self.api, response.body)
        log.info("job relaunched", job=self["id"], new_job=job.get("id"))
        return job


class JobTemplate(Resource, exclude=("extra_vars", "survey_spec")):
    endpoint = "job_templates"

    def launch(self, vars: Any = None) -> Job:
        """
        Launch the template and return the job it started.

        ``vars`` may be a mapping, JSON text or YAML text.
        """
        body = ExtraVars(vars).extra_vars()
        response = self.api.post(f"{self.detail_url}launch/", body)
        document = load_json(response.body)
        job_id = document.get("job") if isinstance(document, dict) else None
        if job_id is None:
            raise ParseError(f"launch response has no job id: {response.body}")
        log.info("job template launched", job_template=self.get("id"), job=job_id)
        return Job.find(self.api, job_id)

    def survey_spec(self) -> str | None:
        related = self.get("related") or {}
        spec_url = related.get("survey_spec")
        if not spec_url:
            return None
        return self.api.get(spec_url).body

    def survey_spec_hash(self) -> dict:
        spec = self.survey_spec()
        return {} if spec is None else load_json(spec)


class Inventory(Resource, exclude=("variables",)):
    endpoint = "inventories"

    def hosts(self) -> list["Host"]:
        return self._sub_collection(Host, "hosts")

    def groups(self) -> list["Group"]:
        return self._sub_collection(Group, "groups")


class Host(Resource, exclude=("variables",)):
    endpoint = "hosts"

    def groups(self) -> list["Host"]:
        return self._sub_collection(Host, "groups")


class Group(Resource, exclude=("variables",)):
    endpoint = "groups"

    def children(self) -> list["Group"]:
        return self._sub_collection(Group, "children")


class AdHocCommand(Resource, exclude=("extra_vars",)):
    endpoint = "ad_hoc_commands"

    def relaunch(self) -> "AdHocCommand":
        response = self.api.post(f"{self.detail_url}relaunch/")
        command = AdHocCommand(self.api, response.body)
        log.info(
            "ad hoc command relaunched", ad_hoc_command=self["id"], new=command.get("id")
        )
        return command


RESOURCE_TYPES: dict[str, type[Resource]] = {
    cls.endpoint: cls
    for cls in (JobTemplate, Job, Inventory, Host, Group, AdHocCommand)
}
