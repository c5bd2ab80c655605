import json
from towerclient.api import HttpResponse
from towerclient.exceptions import ResourceNotFound


class FakeApi:
    """
    In-memory stand-in for Api: canned documents keyed by (method, path).
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, str, object]] = []
        self.closed = False

    def add(self, method: str, path: str, document) -> None:
        if not isinstance(document, str):
            document = json.dumps(document)
        self.routes[(method, path)] = document

    def get(self, path, params=None):
        return self._respond("GET", path, params)

    def post(self, path, body=None):
        return self._respond("POST", path, body)

    def close(self):
        self.closed = True

    def _respond(self, method, path, payload):
        self.calls.append((method, path, payload))
        try:
            body = self.routes[(method, path)]
        except KeyError:
            raise ResourceNotFound(f"{method} {path} not found", 404)
        return HttpResponse(url=path, status_code=200, body=body)


PERSON = {
    "firstName": "jeff",
    "lastName": "durand",
    "address": {"street": "22 charlotte rd", "zipCode": "01013"},
    "phones": [{"kind": "home", "number": "555-0100"}, "unlisted"],
    "tags": ["a", "b"],
    "age": 42,
    "active": True,
    "spouse": None,
}

JOB_TEMPLATE = {
    "id": 5,
    "type": "job_template",
    "url": "/api/v2/job_templates/5/",
    "name": "deploy",
    "extra_vars": {"region": "us-east-1"},
    "related": {
        "launch": "/api/v2/job_templates/5/launch/",
        "survey_spec": "/api/v2/job_templates/5/survey_spec/",
    },
}

SURVEY_SPEC = {
    "name": "deploy survey",
    "spec": [{"variable": "region", "type": "text", "required": True}],
}
