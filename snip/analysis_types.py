"""Kinds of database analyses and the record that describes one analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DatabaseType(str, Enum):
    """Database engines an analysis can target."""

    ORACLE = "oracle"
    SQLSERVER = "sqlserver"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    MONGODB = "mongodb"

    def __str__(self) -> str:
        return self.value


class AnalysisType(str, Enum):
    """Analyses that can be performed against a database."""

    DIAGNOSTIC = "diagnostic"
    TUNING = "tuning"
    QUERY = "query"
    TABLESPACE = "tablespace"
    DISK = "disk"
    TABLES = "tables"
    INDEXES = "indexes"
    LOGS = "logs"
    PREDICTIVE = "predictive"
    ERROR_KNOWLEDGE = "error_knowledge"
    # Oracle
    AWR = "awr"
    ASH = "ash"
    EXECUTION_PLAN = "execution_plan"
    # SQL Server
    LOCKS = "locks"
    ACTIVE_SESSIONS = "active_sessions"
    RUNNING_QUERIES = "running_queries"
    # MongoDB
    REPLICATION = "replication"
    SHARDING = "sharding"
    LATENCY = "latency"
    PERFORMANCE = "performance"
    # PostgreSQL
    POSTGRES_REPLICATION = "postgres_replication"
    POSTGRES_LOCKS = "postgres_locks"
    POSTGRES_FRAGMENTATION = "postgres_fragmentation"
    # MySQL
    MYSQL_REPLICATION = "mysql_replication"
    MYSQL_LOCKS = "mysql_locks"
    MYSQL_FRAGMENTATION = "mysql_fragmentation"
    # Checklist and backup
    CHECKLIST = "checklist"
    BACKUP = "backup"
    # Dynamic analyses and chat
    DYNAMIC = "dynamic"
    CHAT = "chat"
    # Oracle pluggable databases
    PDBS = "pdbs"
    PDB = "pdb"
    # SQL Server instance and databases
    INSTANCE = "instance"
    DATABASES = "databases"
    DATABASE = "database"
    # Oracle RAC
    RAC_HEALTH = "rac_health"
    RAC_ERRORS = "rac_errors"
    RAC_LISTENER = "rac_listener"
    RAC_LATENCY = "rac_latency"

    def __str__(self) -> str:
        return self.value


class OutputType(str, Enum):
    """Formats an analysis result can be rendered in."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"
    HTML = "html"

    def __str__(self) -> str:
        return self.value


@dataclass
class DBAnalysis:
    """One analysis of a database, its inputs and its outcome."""

    title: str
    database_type: DatabaseType
    analysis_type: AnalysisType
    output_type: OutputType
    id: int = 0
    connection_config: str = ""
    log_file_path: str = ""
    result: str = ""
    ai_insights: str = ""
    status: str = "pending"
    error_message: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


def new_db_analysis(
    title: str,
    database_type: DatabaseType | str,
    analysis_type: AnalysisType | str,
    output_type: OutputType | str,
) -> DBAnalysis:
    """Create a pending analysis; string kinds are converted and validated."""
    now = datetime.now()
    return DBAnalysis(
        title=title,
        database_type=DatabaseType(database_type),
        analysis_type=AnalysisType(analysis_type),
        output_type=OutputType(output_type),
        status="pending",
        created_at=now,
        updated_at=now,
    )