"""Routine DBA checklists per database engine: daily, weekly and deep reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from snip.analysis_types import DatabaseType


class ChecklistLevel(str, Enum):
    """How thorough a checklist is; each level includes the previous ones."""

    DAILY = "daily"
    WEEKLY = "weekly"
    DEEP = "deep"

    def __str__(self) -> str:
        return self.value


@dataclass
class CheckItem:
    """One check of a database checklist."""

    id: str
    title: str
    category: str
    priority: str
    description: str = ""
    status: str = ""
    result: str = ""
    checked_at: datetime | None = None


@dataclass
class DatabaseChecklist:
    """A checklist generated for one database engine and level."""

    database_type: DatabaseType | str
    checklist_type: ChecklistLevel | str
    items: list[CheckItem] = field(default_factory=list)
    id: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    status: str = "pending"

    def format_checklist(self) -> str:
        """Render the checklist as Markdown, one table per category."""
        lines = [
            f"# Checklist {self.checklist_type} - {self.database_type}\n\n",
            f"**Criado em:** {self.created_at:%Y-%m-%d %H:%M:%S}\n",
            f"**Status:** {self.status}\n\n",
        ]
        categories: dict[str, list[CheckItem]] = {}
        for item in self.items:
            categories.setdefault(item.category, []).append(item)

        for category, items in categories.items():
            lines.append(f"## {category}\n\n")
            lines.append("| Item | Prioridade | Status |\n")
            lines.append("|------|------------|--------|\n")
            lines.extend(
                f"| {item.title} | {item.priority} | {item.status} |\n" for item in items
            )
            lines.append("\n")
        return "".join(lines)


_Entry = tuple[str, str, str]  # title, category, priority

_CATALOG: dict[DatabaseType, tuple[str, dict[ChecklistLevel, list[_Entry]]]] = {
    DatabaseType.ORACLE: (
        "ora",
        {
            ChecklistLevel.DAILY: [
                ("Verificar alertas do banco", "Monitoring", "high"),
                ("Verificar espaço em tablespaces", "Storage", "high"),
                ("Verificar processos ativos", "Performance", "medium"),
                ("Verificar logs de erro", "Logs", "high"),
                ("Verificar status de backup", "Backup", "high"),
            ],
            ChecklistLevel.WEEKLY: [
                ("Analisar AWR reports", "Performance", "high"),
                ("Verificar fragmentação de tabelas", "Maintenance", "medium"),
                ("Revisar estatísticas de objetos", "Optimization", "medium"),
                ("Verificar índices não utilizados", "Optimization", "low"),
                ("Analisar ASH para queries lentas", "Performance", "high"),
                ("Verificar integridade de dados", "Integrity", "high"),
                ("Revisar configurações de segurança", "Security", "medium"),
            ],
            ChecklistLevel.DEEP: [
                ("Análise completa de performance (AWR)", "Performance", "high"),
                ("Auditoria de segurança completa", "Security", "high"),
                ("Análise de capacidade e crescimento", "Capacity", "high"),
                ("Revisão completa de índices", "Optimization", "high"),
                ("Análise de fragmentação completa", "Maintenance", "medium"),
                ("Revisão de parâmetros de instância", "Configuration", "high"),
                ("Teste de restore de backup", "Backup", "high"),
                ("Análise de replicação/DataGuard", "High Availability", "high"),
                ("Revisão de permissões e roles", "Security", "high"),
                ("Análise de latência de rede", "Network", "medium"),
            ],
        },
    ),
    DatabaseType.SQLSERVER: (
        "mssql",
        {
            ChecklistLevel.DAILY: [
                ("Verificar jobs do SQL Agent", "Jobs", "high"),
                ("Verificar espaço em arquivos de dados", "Storage", "high"),
                ("Verificar locks e bloqueios", "Performance", "high"),
                ("Verificar logs de erro", "Logs", "high"),
                ("Verificar status de backup", "Backup", "high"),
            ],
            ChecklistLevel.WEEKLY: [
                ("Analisar DMVs de performance", "Performance", "high"),
                ("Verificar fragmentação de índices", "Maintenance", "medium"),
                ("Revisar estatísticas de tabelas", "Optimization", "medium"),
                ("Verificar índices não utilizados", "Optimization", "low"),
                ("Analisar queries lentas", "Performance", "high"),
                ("Verificar integridade de dados (DBCC)", "Integrity", "high"),
                ("Revisar configurações de segurança", "Security", "medium"),
            ],
            ChecklistLevel.DEEP: [
                ("Análise completa de performance (DMVs)", "Performance", "high"),
                ("Auditoria de segurança completa", "Security", "high"),
                ("Análise de capacidade e crescimento", "Capacity", "high"),
                ("Revisão completa de índices", "Optimization", "high"),
                ("Análise de fragmentação completa", "Maintenance", "medium"),
                ("Revisão de configurações do servidor", "Configuration", "high"),
                ("Teste de restore de backup", "Backup", "high"),
                ("Análise de AlwaysOn/Replicação", "High Availability", "high"),
                ("Revisão de permissões e roles", "Security", "high"),
                ("Análise de latência de I/O", "Performance", "medium"),
            ],
        },
    ),
    DatabaseType.MYSQL: (
        "mysql",
        {
            ChecklistLevel.DAILY: [
                ("Verificar processos lentos", "Performance", "high"),
                ("Verificar espaço em disco", "Storage", "high"),
                ("Verificar locks e bloqueios", "Performance", "high"),
                ("Verificar logs de erro", "Logs", "high"),
                ("Verificar status de backup", "Backup", "high"),
                ("Verificar status de replicação", "Replication", "high"),
            ],
            ChecklistLevel.WEEKLY: [
                ("Analisar slow query log", "Performance", "high"),
                ("Verificar fragmentação de tabelas", "Maintenance", "medium"),
                ("Revisar estatísticas de tabelas", "Optimization", "medium"),
                ("Verificar índices não utilizados", "Optimization", "low"),
                ("Analisar queries lentas", "Performance", "high"),
                ("Verificar integridade de dados", "Integrity", "high"),
                ("Revisar configurações de segurança", "Security", "medium"),
                ("Analisar lag de replicação", "Replication", "high"),
            ],
            ChecklistLevel.DEEP: [
                ("Análise completa de performance", "Performance", "high"),
                ("Auditoria de segurança completa", "Security", "high"),
                ("Análise de capacidade e crescimento", "Capacity", "high"),
                ("Revisão completa de índices", "Optimization", "high"),
                ("Análise de fragmentação completa", "Maintenance", "medium"),
                ("Revisão de configurações do servidor", "Configuration", "high"),
                ("Teste de restore de backup", "Backup", "high"),
                ("Análise completa de replicação", "Replication", "high"),
                ("Revisão de permissões e usuários", "Security", "high"),
                ("Análise de binlog e logs", "Logs", "medium"),
            ],
        },
    ),
    DatabaseType.POSTGRESQL: (
        "pg",
        {
            ChecklistLevel.DAILY: [
                ("Verificar processos ativos", "Performance", "high"),
                ("Verificar espaço em disco", "Storage", "high"),
                ("Verificar locks e bloqueios", "Performance", "high"),
                ("Verificar logs de erro", "Logs", "high"),
                ("Verificar status de backup", "Backup", "high"),
                ("Verificar status de replicação", "Replication", "high"),
            ],
            ChecklistLevel.WEEKLY: [
                ("Analisar pg_stat_statements", "Performance", "high"),
                ("Verificar fragmentação (VACUUM)", "Maintenance", "medium"),
                ("Revisar estatísticas (ANALYZE)", "Optimization", "medium"),
                ("Verificar índices não utilizados", "Optimization", "low"),
                ("Analisar queries lentas", "Performance", "high"),
                ("Verificar integridade de dados", "Integrity", "high"),
                ("Revisar configurações de segurança", "Security", "medium"),
                ("Analisar lag de replicação", "Replication", "high"),
            ],
            ChecklistLevel.DEEP: [
                ("Análise completa de performance", "Performance", "high"),
                ("Auditoria de segurança completa", "Security", "high"),
                ("Análise de capacidade e crescimento", "Capacity", "high"),
                ("Revisão completa de índices", "Optimization", "high"),
                ("Análise de fragmentação completa", "Maintenance", "medium"),
                ("Revisão de configurações (postgresql.conf)", "Configuration", "high"),
                ("Teste de restore de backup", "Backup", "high"),
                ("Análise completa de replicação", "Replication", "high"),
                ("Revisão de permissões e roles", "Security", "high"),
                ("Análise de WAL e logs", "Logs", "medium"),
            ],
        },
    ),
    DatabaseType.MONGODB: (
        "mongo",
        {
            ChecklistLevel.DAILY: [
                ("Verificar status de replicação", "Replication", "high"),
                ("Verificar espaço em disco", "Storage", "high"),
                ("Verificar conexões ativas", "Performance", "medium"),
                ("Verificar logs de erro", "Logs", "high"),
                ("Verificar status de backup", "Backup", "high"),
                ("Verificar status de sharding", "Sharding", "high"),
            ],
            ChecklistLevel.WEEKLY: [
                ("Analisar queries lentas", "Performance", "high"),
                ("Verificar índices não utilizados", "Optimization", "low"),
                ("Revisar estatísticas de coleções", "Optimization", "medium"),
                ("Analisar latência de operações", "Performance", "high"),
                ("Verificar integridade de dados", "Integrity", "high"),
                ("Revisar configurações de segurança", "Security", "medium"),
                ("Analisar lag de replicação", "Replication", "high"),
                ("Verificar distribuição de chunks", "Sharding", "medium"),
            ],
            ChecklistLevel.DEEP: [
                ("Análise completa de performance", "Performance", "high"),
                ("Auditoria de segurança completa", "Security", "high"),
                ("Análise de capacidade e crescimento", "Capacity", "high"),
                ("Revisão completa de índices", "Optimization", "high"),
                ("Análise completa de sharding", "Sharding", "high"),
                ("Revisão de configurações do servidor", "Configuration", "high"),
                ("Teste de restore de backup", "Backup", "high"),
                ("Análise completa de replicação", "Replication", "high"),
                ("Revisão de permissões e roles", "Security", "high"),
                ("Análise de Oplog e logs", "Logs", "medium"),
            ],
        },
    ),
}

_LEVEL_ORDER = (ChecklistLevel.DAILY, ChecklistLevel.WEEKLY, ChecklistLevel.DEEP)


def _coerce(enum_type, value):
    try:
        return enum_type(value)
    except ValueError:
        return None


class ChecklistGenerator:
    """Builds checklists from the built-in catalogue of checks."""

    def generate_checklist(
        self,
        database_type: DatabaseType | str,
        checklist_type: ChecklistLevel | str,
    ) -> DatabaseChecklist:
        """Return a pending checklist; unknown engines or levels get no items."""
        engine = _coerce(DatabaseType, database_type)
        level = _coerce(ChecklistLevel, checklist_type)
        checklist = DatabaseChecklist(
            database_type=engine if engine is not None else database_type,
            checklist_type=level if level is not None else checklist_type,
        )
        if engine is None or level is None or engine not in _CATALOG:
            return checklist

        prefix, levels = _CATALOG[engine]
        for current in _LEVEL_ORDER[: _LEVEL_ORDER.index(level) + 1]:
            checklist.items.extend(
                CheckItem(
                    id=f"{prefix}_{current.value}_{number}",
                    title=title,
                    category=category,
                    priority=priority,
                )
                for number, (title, category, priority) in enumerate(
                    levels[current], start=1
                )
            )
        return checklist