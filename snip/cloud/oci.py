"""Oracle Cloud Autonomous Database inventory through the OCI command-line tool."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

HOURS_PER_MONTH = 24 * 30
OCPU_HOURLY_RATE = 0.30
STORAGE_COST_PER_TB_MONTH = 200.0


@dataclass
class OCIConfig:
    """Settings used when calling the OCI command-line tool."""

    tenancy_ocid: str = ""
    user_ocid: str = ""
    fingerprint: str = ""
    private_key: str = ""
    region: str = ""
    compartment_id: str = ""


@dataclass
class OCIDatabase:
    """An Autonomous Database with an estimated monthly cost."""

    id: str = ""
    name: str = ""
    type: str = ""
    status: str = ""
    shape: str = ""
    ocpus: int = 0
    storage: int = 0
    region: str = ""
    endpoint: str = ""
    cost: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    backup_enabled: bool = False


class OCIClient:
    """Lists Autonomous Databases of a compartment."""

    def __init__(self, config: OCIConfig) -> None:
        self.config = config

    def _env(self) -> dict[str, str]:
        return {
            **os.environ,
            "OCI_TENANCY_OCID": self.config.tenancy_ocid,
            "OCI_USER_OCID": self.config.user_ocid,
            "OCI_FINGERPRINT": self.config.fingerprint,
            "OCI_REGION": self.config.region,
        }

    def list_databases(self) -> list[OCIDatabase]:
        """Return every Autonomous Database in the configured compartment."""
        args = [
            "oci", "db", "autonomous-database", "list",
            "--compartment-id", self.config.compartment_id,
            "--output", "json",
            "--region", self.config.region,
        ]
        try:
            output = subprocess.run(
                args, capture_output=True, text=True, check=True, env=self._env()
            ).stdout
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RuntimeError(f"failed to list Autonomous Databases: {exc}") from exc
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse OCI response: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("failed to parse OCI response: expected an object")
        return [self._to_database(raw) for raw in payload.get("data") or []]

    def _to_database(self, raw: dict[str, Any]) -> OCIDatabase:
        ocpus = int(raw.get("cpu-core-count") or 0)
        storage = int(raw.get("data-storage-size-in-tbs") or 0)
        free_tier = bool(raw.get("is-free-tier", False))
        return OCIDatabase(
            id=raw.get("id") or "",
            name=raw.get("display-name") or "",
            type=f"Autonomous {raw.get('db-workload') or ''}",
            status=raw.get("lifecycle-state") or "",
            shape=f"{ocpus} OCPUs",
            ocpus=ocpus,
            storage=storage,
            region=self.config.region,
            endpoint=raw.get("service-console-url") or "",
            cost=self.estimate_cost(ocpus, storage, free_tier),
            backup_enabled=True,
        )

    def estimate_cost(self, ocpus: int, storage: int, is_free_tier: bool) -> float:
        """Estimate the monthly cost from OCPUs and storage in TB; free tier costs nothing."""
        if is_free_tier:
            return 0.0
        cpu_cost = ocpus * OCPU_HOURLY_RATE * HOURS_PER_MONTH
        return cpu_cost + storage * STORAGE_COST_PER_TB_MONTH

    def get_database_insights(self, name: str) -> str:
        """Return a short summary of where insights for a database are found."""
        return (
            f"Insights para {name}:\n"
            f"- Métricas disponíveis no OCI Monitoring\n"
            f"- Performance insights disponíveis\n"
            f"- Recomendações de otimização"
        )