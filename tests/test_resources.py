import json
import pytest
from towerclient.exceptions import ParseError, ResourceNotFound
from towerclient.record import Record
from towerclient.resources import (
    RESOURCE_TYPES,
    AdHocCommand,
    Group,
    Host,
    Inventory,
    Job,
    JobTemplate,
)
from testdata import FakeApi, JOB_TEMPLATE, SURVEY_SPEC


def test_launch_returns_job():
    api = FakeApi()
    api.add("POST", "job_templates/5/launch/", {"job": 42})
    api.add("GET", "jobs/42/", {"id": 42, "status": "pending"})
    template = JobTemplate(api, {"id": 5, "name": "deploy"})

    job = template.launch({"region": "us-east-1"})

    assert isinstance(job, Job)
    assert job.id == 42
    assert job.status == "pending"
    method, path, body = api.calls[0]
    assert (method, path) == ("POST", "job_templates/5/launch/")
    assert json.loads(body["extra_vars"]) == {"region": "us-east-1"}
    assert api.calls[1] == ("GET", "jobs/42/", None)


def test_launch_uses_document_url():
    api = FakeApi()
    api.add("POST", "/api/v2/job_templates/5/launch/", {"job": 7})
    api.add("GET", "jobs/7/", {"id": 7})
    template = JobTemplate(api, JOB_TEMPLATE)
    assert template.launch("region: eu-west-1").id == 7
    assert json.loads(api.calls[0][2]["extra_vars"]) == {"region": "eu-west-1"}


def test_launch_without_vars():
    api = FakeApi()
    api.add("POST", "job_templates/5/launch/", {"job": 1})
    api.add("GET", "jobs/1/", {"id": 1})
    JobTemplate(api, {"id": 5}).launch()
    assert api.calls[0][2] == {"extra_vars": "{}"}


def test_launch_missing_job():
    api = FakeApi()
    api.add("POST", "job_templates/5/launch/", {"job": 42})
    template = JobTemplate(api, {"id": 5})
    with pytest.raises(ResourceNotFound):
        template.launch()


@pytest.mark.parametrize("response", [{"status": "ok"}, [42]])
def test_launch_response_without_job(response):
    api = FakeApi()
    api.add("POST", "job_templates/5/launch/", response)
    with pytest.raises(ParseError):
        JobTemplate(api, {"id": 5}).launch()
    assert len(api.calls) == 1


def test_job_template_excludes_extra_vars():
    template = JobTemplate(FakeApi(), JOB_TEMPLATE)
    assert type(template.extra_vars) is dict
    assert isinstance(template.related, Record)
    assert template.to_dict() == JOB_TEMPLATE


def test_survey_spec():
    api = FakeApi()
    api.add("GET", "/api/v2/job_templates/5/survey_spec/", SURVEY_SPEC)
    template = JobTemplate(api, JOB_TEMPLATE)
    assert json.loads(template.survey_spec()) == SURVEY_SPEC
    assert template.survey_spec_hash() == SURVEY_SPEC


def test_survey_spec_absent():
    api = FakeApi()
    template = JobTemplate(api, {"id": 5, "related": {"launch": "x"}})
    assert template.survey_spec() is None
    assert template.survey_spec_hash() == {}
    assert api.calls == []


def test_survey_spec_no_related():
    template = JobTemplate(FakeApi(), {"id": 5})
    assert template.survey_spec() is None


def test_find():
    api = FakeApi()
    api.add("GET", "inventories/2/", {"id": 2, "name": "prod"})
    inventory = Inventory.find(api, 2)
    assert isinstance(inventory, Inventory)
    assert inventory.name == "prod"
    assert inventory.api is api


def test_host_groups():
    api = FakeApi()
    api.add(
        "GET",
        "hosts/3/groups/",
        {"count": 2, "results": [{"id": 10, "name": "web"}, {"id": 11, "name": "db"}]},
    )
    groups = Host(api, {"id": 3}).groups()
    assert [g.name for g in groups] == ["web", "db"]
    assert all(isinstance(g, Host) for g in groups)
    assert groups[0].api is api


def test_group_children():
    api = FakeApi()
    api.add("GET", "groups/10/children/", [{"id": 12, "name": "web-east"}])
    children = Group(api, {"id": 10}).children()
    assert len(children) == 1
    assert isinstance(children[0], Group)
    assert children[0].id == 12


def test_inventory_hosts_and_groups():
    api = FakeApi()
    api.add("GET", "inventories/2/hosts/", [{"id": 3}, {"id": 4}])
    api.add("GET", "inventories/2/groups/", [{"id": 10}])
    inventory = Inventory(api, {"id": 2})
    assert [h.id for h in inventory.hosts()] == [3, 4]
    assert all(isinstance(h, Host) for h in inventory.hosts())
    assert [g.id for g in inventory.groups()] == [10]


def test_host_variables_excluded():
    host = Host(FakeApi(), {"id": 3, "variables": {"ansible_host": {"ip": "10.0.0.1"}}})
    assert type(host.variables) is dict


def test_ad_hoc_command_relaunch():
    api = FakeApi()
    api.add("POST", "/api/v2/ad_hoc_commands/8/relaunch/", {"id": 9, "status": "new"})
    command = AdHocCommand(api, {"id": 8, "url": "/api/v2/ad_hoc_commands/8/"})
    relaunched = command.relaunch()
    assert isinstance(relaunched, AdHocCommand)
    assert relaunched.id == 9
    assert api.calls == [("POST", "/api/v2/ad_hoc_commands/8/relaunch/", None)]


def test_job_relaunch():
    api = FakeApi()
    api.add("POST", "jobs/42/relaunch/", {"id": 43, "status": "pending"})
    relaunched = Job(api, {"id": 42}).relaunch()
    assert isinstance(relaunched, Job)
    assert relaunched.id == 43


def test_detail_url():
    api = FakeApi()
    assert Host(api, {"id": 3}).detail_url == "hosts/3/"
    assert Host(api, {"id": 3, "url": "/api/v2/hosts/3/"}).detail_url == (
        "/api/v2/hosts/3/"
    )


def test_api_key_does_not_shadow_api():
    api = FakeApi()
    host = Host(api, {"id": 3, "api": "field"})
    assert host.api is api
    assert host._api == "field"


def test_collection_for_list():
    api = FakeApi()
    hosts = Host.collection_for(api, '[{"id": 2}, {"id": 1}]')
    assert [h.id for h in hosts] == [2, 1]


def test_collection_for_page():
    hosts = Host.collection_for(FakeApi(), '{"count": 1, "results": [{"id": 5}]}')
    assert [h.id for h in hosts] == [5]


@pytest.mark.parametrize("body", ['{"id": 1}', "not json", "42"])
def test_collection_for_invalid(body):
    with pytest.raises(ParseError):
        Host.collection_for(FakeApi(), body)


def test_resource_equality():
    api = FakeApi()
    assert Host(api, {"id": 1}) == Host(FakeApi(), '{"id": 1}')
    assert Host(api, {"id": 1}) != Host(api, {"id": 2})


def test_resource_repr():
    assert repr(Host(FakeApi(), {"id": 1, "name": "web1"})) == (
        "<Host id=1, name='web1'>"
    )


def test_resource_types():
    assert RESOURCE_TYPES == {
        "job_templates": JobTemplate,
        "jobs": Job,
        "inventories": Inventory,
        "hosts": Host,
        "groups": Group,
        "ad_hoc_commands": AdHocCommand,
    }
