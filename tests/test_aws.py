import json
import subprocess
from unittest import mock

import pytest

from snip.cloud.aws import AWSClient, AWSConfig

SAMPLE = {
    "DBInstances": [
        {
            "DBInstanceIdentifier": "orders",
            "Engine": "postgres",
            "EngineVersion": "15.4",
            "DBInstanceStatus": "available",
            "DBInstanceClass": "db.t3.micro",
            "AllocatedStorage": 20,
            "MultiAZ": False,
            "Endpoint": {"Address": "orders.example.com", "Port": 5432},
            "BackupRetentionPeriod": 7,
            "TagList": [{"Key": "env", "Value": "prod"}],
        },
        {
            "DBInstanceIdentifier": "reports",
            "Engine": "mysql",
            "DBInstanceClass": "db.r5.large",
            "AllocatedStorage": 100,
            "MultiAZ": True,
        },
    ]
}


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout)


def test_list_databases_parses_instances():
    client = AWSClient(AWSConfig(region="us-east-1"))
    with mock.patch("subprocess.run", return_value=_completed(json.dumps(SAMPLE))) as run:
        databases = client.list_databases()
    args = run.call_args.args[0]
    assert args[:3] == ["aws", "rds", "describe-db-instances"]
    assert args[args.index("--region") + 1] == "us-east-1"
    assert run.call_args.kwargs["env"] is None

    assert [db.identifier for db in databases] == ["orders", "reports"]
    first, second = databases
    assert first.endpoint == "orders.example.com"
    assert first.port == 5432
    assert first.tags == {"env": "prod"}
    assert first.backup_retention == 7
    assert first.cost == pytest.approx(client.estimate_cost("db.t3.micro", False, 20))
    assert second.multi_az is True
    assert second.endpoint == ""
    assert second.tags == {}
    assert second.cost == pytest.approx(client.estimate_cost("db.r5.large", True, 100))


def test_profile_is_passed_in_environment():
    client = AWSClient(AWSConfig(region="eu-west-1", profile="ops"))
    with mock.patch("subprocess.run", return_value=_completed('{"DBInstances": []}')) as run:
        assert client.list_databases() == []
    assert run.call_args.kwargs["env"]["AWS_PROFILE"] == "ops"


def test_cli_failure_raises():
    client = AWSClient(AWSConfig(region="us-east-1"))
    error = subprocess.CalledProcessError(255, ["aws"])
    with mock.patch("subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError, match="list RDS databases"):
            client.list_databases()


def test_missing_cli_raises():
    client = AWSClient(AWSConfig(region="us-east-1"))
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("aws")):
        with pytest.raises(RuntimeError):
            client.list_databases()


def test_invalid_json_raises():
    client = AWSClient(AWSConfig(region="us-east-1"))
    with mock.patch("subprocess.run", return_value=_completed("not json")):
        with pytest.raises(ValueError):
            client.list_databases()


def test_multi_az_doubles_instance_cost():
    client = AWSClient(AWSConfig())
    single = client.estimate_cost("db.t3.medium", False, 0)
    assert client.estimate_cost("db.t3.medium", True, 0) == pytest.approx(2 * single)


def test_storage_cost_is_linear():
    client = AWSClient(AWSConfig())
    base = client.estimate_cost("db.t3.small", False, 0)
    hundred = client.estimate_cost("db.t3.small", False, 100)
    two_hundred = client.estimate_cost("db.t3.small", False, 200)
    assert two_hundred - base == pytest.approx(2 * (hundred - base))
    assert hundred > base


def test_known_classes_are_ordered_by_price():
    client = AWSClient(AWSConfig())
    classes = ["db.t3.micro", "db.t3.small", "db.t3.medium", "db.r5.large", "db.r5.xlarge"]
    costs = [client.estimate_cost(name, False, 0) for name in classes]
    assert costs == sorted(costs)
    assert len(set(costs)) == len(costs)


def test_unknown_class_uses_default_rate():
    client = AWSClient(AWSConfig())
    assert client.estimate_cost("db.m5.large", False, 0) == pytest.approx(72.0)


def test_database_insights_include_metrics():
    client = AWSClient(AWSConfig(region="us-east-1"))
    with mock.patch("subprocess.run", return_value=_completed('{"Datapoints": []}')) as run:
        insights = client.get_database_insights("orders")
    args = run.call_args.args[0]
    assert "Name=DBInstanceIdentifier,Value=orders" in args
    assert args[:3] == ["aws", "cloudwatch", "get-metric-statistics"]
    assert insights.startswith("Insights para orders:\n")
    assert insights.endswith('{"Datapoints": []}')


def test_database_insights_failure_raises():
    client = AWSClient(AWSConfig(region="us-east-1"))
    with mock.patch("subprocess.run", side_effect=subprocess.CalledProcessError(1, ["aws"])):
        with pytest.raises(RuntimeError, match="metrics"):
            client.get_database_insights("orders")