"""Google Cloud SQL inventory through the gcloud command-line tool."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MONTHLY_COST = 50.0

# Approximate monthly prices, matched by substring in this order.
_MONTHLY_COSTS = (
    ("db-f1-micro", 7.67),
    ("db-g1-small", 25.56),
    ("db-n1-standard-1", 51.11),
    ("db-n1-standard-2", 102.22),
    ("db-n1-highmem-2", 122.67),
)


@dataclass
class GCPConfig:
    """Settings used when calling the gcloud command-line tool."""

    project_id: str = ""
    region: str = ""
    zone: str = ""


@dataclass
class GCPDatabase:
    """A Cloud SQL instance with an estimated monthly cost."""

    name: str = ""
    type: str = ""
    status: str = ""
    tier: str = ""
    region: str = ""
    endpoint: str = ""
    cost: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    backup_enabled: bool = False


class GCPClient:
    """Lists Cloud SQL instances of a project."""

    def __init__(self, config: GCPConfig) -> None:
        self.config = config

    def list_databases(self) -> list[GCPDatabase]:
        """Return every Cloud SQL instance of the configured project."""
        args = [
            "gcloud", "sql", "instances", "list",
            "--format", "json",
            "--project", self.config.project_id,
        ]
        try:
            output = subprocess.run(
                args, capture_output=True, text=True, check=True
            ).stdout
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RuntimeError(f"failed to list Cloud SQL instances: {exc}") from exc
        try:
            instances = json.loads(output) or []
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse GCP response: {exc}") from exc
        if not isinstance(instances, list):
            raise ValueError("failed to parse GCP response: expected a list")
        return [self._to_database(instance) for instance in instances]

    def _to_database(self, raw: dict[str, Any]) -> GCPDatabase:
        settings = raw.get("settings") or {}
        backup = settings.get("backupConfiguration") or {}
        addresses = raw.get("ipAddresses") or []
        tier = settings.get("tier") or ""
        return GCPDatabase(
            name=raw.get("name") or "",
            type=raw.get("databaseVersion") or "",
            status=raw.get("state") or "",
            tier=tier,
            region=raw.get("region") or "",
            endpoint=(addresses[0].get("ipAddress") or "") if addresses else "",
            cost=self.estimate_cost(tier),
            backup_enabled=bool(backup.get("enabled", False)),
        )

    def estimate_cost(self, tier: str) -> float:
        """Estimate the monthly cost of an instance tier."""
        return next(
            (cost for name, cost in _MONTHLY_COSTS if name in tier),
            DEFAULT_MONTHLY_COST,
        )

    def get_database_insights(self, name: str) -> str:
        """Return a short summary of where insights for an instance are found."""
        return (
            f"Insights para {name}:\n"
            f"- Métricas disponíveis no Cloud Monitoring\n"
            f"- Recomendações de otimização disponíveis"
        )