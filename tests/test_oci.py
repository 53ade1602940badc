import json
import subprocess
from unittest import mock

import pytest

from snip.cloud.oci import OCIClient, OCIConfig


def _config():
    return OCIConfig(
        tenancy_ocid="ocid1.tenancy.oc1..example",
        user_ocid="ocid1.user.oc1..example",
        fingerprint="example-fingerprint",
        region="sa-saopaulo-1",
        compartment_id="ocid1.compartment.oc1..example",
    )


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


PAYLOAD = {
    "data": [
        {
            "id": "ocid1.autonomousdatabase.oc1..one",
            "display-name": "sales",
            "lifecycle-state": "AVAILABLE",
            "db-workload": "OLTP",
            "is-free-tier": False,
            "cpu-core-count": 2,
            "data-storage-size-in-tbs": 1,
            "service-console-url": "https://console.example.com/sales",
        },
        {
            "id": "ocid1.autonomousdatabase.oc1..two",
            "display-name": "free",
            "lifecycle-state": "STOPPED",
            "db-workload": "DW",
            "is-free-tier": True,
            "cpu-core-count": 1,
            "data-storage-size-in-tbs": 1,
            "service-console-url": "",
        },
    ]
}


def test_list_databases_maps_fields():
    client = OCIClient(_config())
    with mock.patch("subprocess.run", return_value=_completed(json.dumps(PAYLOAD))):
        databases = client.list_databases()
    assert [db.name for db in databases] == ["sales", "free"]
    first = databases[0]
    assert first.id == "ocid1.autonomousdatabase.oc1..one"
    assert first.type == "Autonomous OLTP"
    assert first.shape == "2 OCPUs"
    assert first.ocpus == 2
    assert first.storage == 1
    assert first.region == "sa-saopaulo-1"
    assert first.status == "AVAILABLE"
    assert first.endpoint == "https://console.example.com/sales"
    assert first.backup_enabled is True
    assert first.cost == client.estimate_cost(2, 1, False)
    assert databases[1].cost == 0.0


def test_list_databases_passes_command_and_environment():
    client = OCIClient(_config())
    with mock.patch("subprocess.run", return_value=_completed('{"data": []}')) as run:
        assert client.list_databases() == []
    args = run.call_args.args[0]
    assert args[:4] == ["oci", "db", "autonomous-database", "list"]
    assert "ocid1.compartment.oc1..example" in args
    env = run.call_args.kwargs["env"]
    assert env["OCI_TENANCY_OCID"] == "ocid1.tenancy.oc1..example"
    assert env["OCI_REGION"] == "sa-saopaulo-1"


def test_list_databases_command_failure():
    client = OCIClient(_config())
    error = subprocess.CalledProcessError(1, ["oci"])
    with mock.patch("subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError):
            client.list_databases()


def test_list_databases_invalid_json():
    client = OCIClient(_config())
    with mock.patch("subprocess.run", return_value=_completed("not json")):
        with pytest.raises(ValueError):
            client.list_databases()


def test_estimate_cost_invariants():
    client = OCIClient(_config())
    assert client.estimate_cost(8, 4, True) == 0.0
    assert client.estimate_cost(0, 0, False) == 0.0
    assert client.estimate_cost(3, 1, False) - client.estimate_cost(3, 0, False) == pytest.approx(200.0)
    assert client.estimate_cost(4, 0, False) == pytest.approx(2 * client.estimate_cost(2, 0, False))


def test_insights_mentions_name():
    text = OCIClient(_config()).get_database_insights("sales")
    assert text.startswith("Insights para sales:")
    assert "OCI Monitoring" in text