"""Azure database inventory through the Azure command-line tool."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from typing import Any


@dataclass
class AzureConfig:
    """Settings used when calling the Azure command-line tool."""

    subscription_id: str = ""
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    resource_group: str = ""


@dataclass
class AzureDatabase:
    """An Azure SQL, PostgreSQL or MySQL database with an estimated monthly cost."""

    name: str = ""
    type: str = ""
    status: str = ""
    tier: str = ""
    size: str = ""
    location: str = ""
    endpoint: str = ""
    cost: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    backup_enabled: bool = False


def _run(args: list[str]) -> str:
    return subprocess.run(args, capture_output=True, text=True, check=True).stdout


def _open_source_cost(tier: str) -> float:
    if "Basic" in tier:
        return 25.0
    if "GeneralPurpose" in tier:
        return 200.0
    if "MemoryOptimized" in tier:
        return 500.0
    return 100.0


class AzureClient:
    """Lists Azure databases across SQL, PostgreSQL and MySQL servers."""

    def __init__(self, config: AzureConfig) -> None:
        self.config = config

    def list_databases(self) -> list[AzureDatabase]:
        """Return SQL databases, then PostgreSQL and MySQL servers.

        Failing to list SQL servers raises; a server whose databases cannot be
        listed, and unavailable PostgreSQL or MySQL listings, are skipped.
        """
        args = [
            "az", "sql", "server", "list",
            "--output", "json",
            "--subscription", self.config.subscription_id,
        ]
        if self.config.resource_group:
            args += ["--resource-group", self.config.resource_group]
        try:
            output = _run(args)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RuntimeError(f"failed to list SQL databases: {exc}") from exc
        try:
            servers = json.loads(output) or []
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse Azure response: {exc}") from exc
        if not isinstance(servers, list):
            raise ValueError("failed to parse Azure response: expected a list")

        databases: list[AzureDatabase] = []
        for server in servers:
            databases.extend(self._sql_databases(server))
        databases.extend(self._flexible_servers("postgres", "PostgreSQL", "postgres"))
        databases.extend(self._flexible_servers("mysql", "MySQL", "mysql"))
        return databases

    def _sql_databases(self, server: dict[str, Any]) -> list[AzureDatabase]:
        server_name = server.get("name") or ""
        try:
            output = _run(
                [
                    "az", "sql", "db", "list",
                    "--server", server_name,
                    "--output", "json",
                    "--subscription", self.config.subscription_id,
                ]
            )
            dbs = json.loads(output) or []
        except (OSError, subprocess.CalledProcessError, json.JSONDecodeError):
            return []
        if not isinstance(dbs, list):
            return []

        tags = {
            key: value
            for key, value in (server.get("tags") or {}).items()
            if isinstance(value, str)
        }
        result = []
        for db in dbs:
            tier = db.get("serviceLevelObjective") or ""
            size = db.get("currentServiceObjectiveName") or ""
            result.append(
                AzureDatabase(
                    name=f"{server_name}/{db.get('name') or ''}",
                    type="SQL",
                    status=db.get("status") or "",
                    tier=tier,
                    size=size,
                    location=server.get("location") or "",
                    endpoint=f"{server_name}.database.windows.net",
                    cost=self.estimate_cost(tier, size),
                    tags=dict(tags),
                    backup_enabled=True,
                )
            )
        return result

    def _flexible_servers(
        self, command: str, label: str, domain: str
    ) -> list[AzureDatabase]:
        try:
            output = _run(
                [
                    "az", command, "server", "list",
                    "--output", "json",
                    "--subscription", self.config.subscription_id,
                ]
            )
            servers = json.loads(output) or []
        except (OSError, subprocess.CalledProcessError, json.JSONDecodeError):
            return []
        if not isinstance(servers, list):
            return []

        estimate = (
            self.estimate_postgresql_cost if label == "PostgreSQL" else self.estimate_mysql_cost
        )
        result = []
        for server in servers:
            sku = server.get("sku") or {}
            tier = sku.get("tier") or ""
            size = sku.get("name") or ""
            name = server.get("name") or ""
            result.append(
                AzureDatabase(
                    name=name,
                    type=label,
                    status=server.get("userVisibleState") or "",
                    tier=tier,
                    size=size,
                    location=server.get("location") or "",
                    endpoint=f"{name}.{domain}.database.azure.com",
                    cost=estimate(tier, size),
                )
            )
        return result

    def estimate_cost(self, tier: str, size: str) -> float:
        """Estimate the monthly cost of an Azure SQL database by tier."""
        if "Basic" in tier:
            return 5.0
        if "Standard" in tier:
            return 15.0
        if "Premium" in tier:
            return 465.0
        return 0.0

    def estimate_postgresql_cost(self, tier: str, size: str) -> float:
        """Estimate the monthly cost of a PostgreSQL server by tier."""
        return _open_source_cost(tier)

    def estimate_mysql_cost(self, tier: str, size: str) -> float:
        """Estimate the monthly cost of a MySQL server by tier."""
        return _open_source_cost(tier)

    def get_database_insights(self, name: str) -> str:
        """Return a short summary of where insights for a database are found."""
        return (
            f"Insights para {name}:\n"
            f"- Métricas disponíveis no Azure Monitor\n"
            f"- Recomendações de otimização disponíveis"
        )