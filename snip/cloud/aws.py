"""Amazon RDS inventory through the AWS command-line tool."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

HOURS_PER_MONTH = 24 * 30
STORAGE_COST_PER_GB_MONTH = 0.115
DEFAULT_HOURLY_RATE = 0.1

# Approximate on-demand hourly rates, matched by substring in this order.
_HOURLY_RATES = (
    ("db.t3.micro", 0.017),
    ("db.t3.small", 0.034),
    ("db.t3.medium", 0.068),
    ("db.r5.large", 0.24),
    ("db.r5.xlarge", 0.48),
)

_METRICS_START = "2024-01-01T00:00:00Z"
_METRICS_END = "2024-01-02T00:00:00Z"


@dataclass
class AWSConfig:
    """Settings used when calling the AWS command-line tool."""

    region: str = ""
    profile: str = ""
    access_key_id: str = ""
    secret_key: str = ""


@dataclass
class AWSDatabase:
    """An RDS instance with an estimated monthly cost."""

    identifier: str = ""
    engine: str = ""
    engine_version: str = ""
    status: str = ""
    instance_class: str = ""
    storage: int = 0
    multi_az: bool = False
    endpoint: str = ""
    port: int = 0
    cost: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    backup_retention: int = 0


class AWSClient:
    """Lists RDS databases and fetches their metrics."""

    def __init__(self, config: AWSConfig) -> None:
        self.config = config

    def _env(self) -> dict[str, str] | None:
        if not self.config.profile:
            return None
        return {**os.environ, "AWS_PROFILE": self.config.profile}

    def _run(self, args: list[str], action: str) -> str:
        try:
            completed = subprocess.run(
                args, capture_output=True, text=True, check=True, env=self._env()
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RuntimeError(f"failed to {action}: {exc}") from exc
        return completed.stdout

    def list_databases(self) -> list[AWSDatabase]:
        """Return every RDS instance in the configured region."""
        output = self._run(
            [
                "aws", "rds", "describe-db-instances",
                "--output", "json",
                "--region", self.config.region,
            ],
            "list RDS databases",
        )
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse AWS response: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("failed to parse AWS response: expected an object")

        return [self._to_database(raw) for raw in payload.get("DBInstances") or []]

    def _to_database(self, raw: dict[str, Any]) -> AWSDatabase:
        endpoint = raw.get("Endpoint") or {}
        tags = {
            tag.get("Key", ""): tag.get("Value", "")
            for tag in raw.get("TagList") or []
        }
        instance_class = raw.get("DBInstanceClass") or ""
        multi_az = bool(raw.get("MultiAZ", False))
        storage = int(raw.get("AllocatedStorage") or 0)
        return AWSDatabase(
            identifier=raw.get("DBInstanceIdentifier") or "",
            engine=raw.get("Engine") or "",
            engine_version=raw.get("EngineVersion") or "",
            status=raw.get("DBInstanceStatus") or "",
            instance_class=instance_class,
            storage=storage,
            multi_az=multi_az,
            endpoint=endpoint.get("Address") or "",
            port=int(endpoint.get("Port") or 0),
            cost=self.estimate_cost(instance_class, multi_az, storage),
            tags=tags,
            backup_retention=int(raw.get("BackupRetentionPeriod") or 0),
        )

    def estimate_cost(self, instance_class: str, multi_az: bool, storage: int) -> float:
        """Estimate the monthly cost of an instance and its storage in GB."""
        hourly = next(
            (rate for name, rate in _HOURLY_RATES if name in instance_class),
            DEFAULT_HOURLY_RATE,
        )
        if multi_az:
            hourly *= 2
        return hourly * HOURS_PER_MONTH + storage * STORAGE_COST_PER_GB_MONTH

    def get_database_insights(self, identifier: str) -> str:
        """Fetch CPU metrics for an instance from CloudWatch and summarise them."""
        output = self._run(
            [
                "aws", "cloudwatch", "get-metric-statistics",
                "--namespace", "AWS/RDS",
                "--metric-name", "CPUUtilization",
                "--dimensions", f"Name=DBInstanceIdentifier,Value={identifier}",
                "--start-time", _METRICS_START,
                "--end-time", _METRICS_END,
                "--period", "3600",
                "--statistics", "Average",
                "--output", "json",
                "--region", self.config.region,
            ],
            "fetch metrics",
        )
        return (
            f"Insights para {identifier}:\n"
            f"- Métricas obtidas do CloudWatch\n"
            f"- Dados: {output}"
        )