"""Bulk checklists: loading them from CSV, CSV templates and Markdown reports."""

from __future__ import annotations

import csv
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path

REQUIRED_FIELDS = ("title", "description", "category")
NOTES_PREVIEW_LENGTH = 50
UNCATEGORIZED = "Sem Categoria"


class ChecklistType(str, Enum):
    """Kinds of bulk checklist templates."""

    GENERIC = "generic"
    DAILY = "daily"
    WEEKLY = "weekly"
    DEEP = "deep"
    BACKUP = "backup"
    SECURITY = "security"
    PERFORMANCE = "performance"
    MAINTENANCE = "maintenance"

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS = {
    ChecklistType.GENERIC: "Checklist genérico com campos básicos",
    ChecklistType.DAILY: "Checklist diário para tarefas rotineiras",
    ChecklistType.WEEKLY: "Checklist semanal para revisões periódicas",
    ChecklistType.DEEP: "Checklist profundo para análises detalhadas",
    ChecklistType.BACKUP: "Checklist específico para backups e restores",
    ChecklistType.SECURITY: "Checklist de segurança e compliance",
    ChecklistType.PERFORMANCE: "Checklist de performance e monitoramento",
    ChecklistType.MAINTENANCE: "Checklist de manutenção preventiva",
}

_BASE_HEADERS = ["title", "description", "category", "priority", "status", "notes"]

_TEMPLATES: dict[ChecklistType, tuple[list[str], list[list[str]]]] = {
    ChecklistType.DAILY: (
        _BASE_HEADERS + ["check_time", "result"],
        [
            ["Verificar conexões ativas", "Contar número de conexões ativas no banco", "Monitoramento", "high", "pending", "", "09:00", ""],
            ["Verificar espaço em disco", "Verificar espaço disponível em tablespaces", "Storage", "high", "pending", "", "09:00", ""],
            ["Verificar logs de erro", "Revisar logs de erro das últimas 24h", "Logs", "medium", "pending", "", "09:00", ""],
            ["Verificar backups", "Confirmar execução dos backups agendados", "Backup", "high", "pending", "", "10:00", ""],
        ],
    ),
    ChecklistType.WEEKLY: (
        _BASE_HEADERS + ["week", "assigned_to"],
        [
            ["Análise de performance", "Revisar queries lentas e índices", "Performance", "high", "pending", "", "Semana 1", ""],
            ["Revisão de segurança", "Auditar usuários e permissões", "Security", "high", "pending", "", "Semana 1", ""],
            ["Atualização de estatísticas", "Executar ANALYZE/UPDATE STATISTICS", "Manutenção", "medium", "pending", "", "Semana 1", ""],
            ["Revisão de fragmentação", "Verificar fragmentação de tabelas", "Manutenção", "medium", "pending", "", "Semana 1", ""],
        ],
    ),
    ChecklistType.DEEP: (
        _BASE_HEADERS + ["impact", "effort", "risk_level"],
        [
            ["Auditoria completa de segurança", "Revisão completa de segurança do banco", "Security", "high", "pending", "", "Alto", "Alto", "Médio"],
            ["Análise de capacidade", "Projeção de crescimento e capacidade", "Capacidade", "high", "pending", "", "Alto", "Médio", "Baixo"],
            ["Otimização de índices", "Análise e otimização de todos os índices", "Performance", "medium", "pending", "", "Médio", "Alto", "Baixo"],
            ["Revisão de arquitetura", "Avaliar arquitetura e sugerir melhorias", "Arquitetura", "high", "pending", "", "Alto", "Alto", "Médio"],
        ],
    ),
    ChecklistType.BACKUP: (
        _BASE_HEADERS + ["backup_type", "retention_days", "last_backup"],
        [
            ["Backup completo", "Verificar execução de backup completo", "Backup", "high", "pending", "", "Full", "30", ""],
            ["Backup incremental", "Verificar execução de backup incremental", "Backup", "high", "pending", "", "Incremental", "7", ""],
            ["Teste de restore", "Testar procedimento de restore", "Backup", "high", "pending", "", "Test", "", ""],
            ["Verificar retenção", "Confirmar políticas de retenção", "Backup", "medium", "pending", "", "Policy", "", ""],
        ],
    ),
    ChecklistType.SECURITY: (
        _BASE_HEADERS + ["severity", "compliance", "remediation"],
        [
            ["Auditar usuários", "Revisar usuários e remover inativos", "Security", "high", "pending", "", "Alta", "SOX", "Remover usuários inativos"],
            ["Revisar permissões", "Auditar permissões e privilégios", "Security", "high", "pending", "", "Alta", "PCI-DSS", "Aplicar least privilege"],
            ["Verificar criptografia", "Confirmar criptografia de dados sensíveis", "Security", "high", "pending", "", "Alta", "GDPR", "Habilitar TDE"],
            ["Auditar logs de acesso", "Revisar logs de acesso e autenticação", "Security", "medium", "pending", "", "Média", "SOX", "Configurar alertas"],
        ],
    ),
    ChecklistType.PERFORMANCE: (
        _BASE_HEADERS + ["metric", "threshold", "current_value"],
        [
            ["CPU Utilization", "Monitorar utilização de CPU", "Performance", "high", "pending", "", "CPU %", "80%", ""],
            ["Memory Usage", "Monitorar uso de memória", "Performance", "high", "pending", "", "Memory %", "85%", ""],
            ["Disk I/O", "Monitorar I/O de disco", "Performance", "medium", "pending", "", "IOPS", "1000", ""],
            ["Query Performance", "Identificar queries lentas", "Performance", "high", "pending", "", "Query Time", "5s", ""],
        ],
    ),
    ChecklistType.MAINTENANCE: (
        _BASE_HEADERS + ["frequency", "last_execution", "next_execution"],
        [
            ["Vacuum/Analyze", "Executar VACUUM e ANALYZE", "Manutenção", "medium", "pending", "", "Semanal", "", ""],
            ["Reindex", "Reindexar tabelas fragmentadas", "Manutenção", "low", "pending", "", "Mensal", "", ""],
            ["Update Statistics", "Atualizar estatísticas do otimizador", "Manutenção", "medium", "pending", "", "Semanal", "", ""],
            ["Cleanup Logs", "Limpar logs antigos", "Manutenção", "low", "pending", "", "Mensal", "", ""],
        ],
    ),
    ChecklistType.GENERIC: (
        list(_BASE_HEADERS),
        [
            ["Item 1", "Descrição do item 1", "Categoria 1", "high", "pending", "Notas adicionais"],
            ["Item 2", "Descrição do item 2", "Categoria 2", "medium", "pending", ""],
            ["Item 3", "Descrição do item 3", "Categoria 1", "low", "completed", "Item concluído"],
        ],
    ),
}

_COMPLETED_STATUSES = {"completed", "done", "ok"}
_FAILED_STATUSES = {"failed", "error"}


@dataclass
class BulkChecklistItem:
    """One row of a bulk checklist."""

    title: str
    description: str
    category: str
    priority: str = "medium"
    status: str = "pending"
    notes: str = ""


@dataclass
class BulkChecklistResult:
    """The items of a bulk checklist and their tallies."""

    total_items: int = 0
    completed: int = 0
    pending: int = 0
    failed: int = 0
    items: list[BulkChecklistItem] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)
    execution_time: timedelta = field(default_factory=timedelta)

    def add(self, item: BulkChecklistItem) -> None:
        """Append an item and count it by its status."""
        self.items.append(item)
        self.total_items += 1
        status = item.status.lower()
        if status in _COMPLETED_STATUSES:
            self.completed += 1
        elif status in _FAILED_STATUSES:
            self.failed += 1
        else:
            self.pending += 1


def _uncommented(lines: Iterable[str]) -> Iterator[str]:
    return (line for line in lines if not line.startswith("#"))


def _read_records(csv_path: str | Path) -> list[list[str]]:
    with open(csv_path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(_uncommented(handle), skipinitialspace=True)
        records = [row for row in reader if row]
    if records:
        expected = len(records[0])
        for number, record in enumerate(records[1:], start=2):
            if len(record) != expected:
                raise ValueError(
                    f"CSV record {number} has {len(record)} fields, expected {expected}"
                )
    return records


def process_bulk_checklist_from_csv(csv_path: str | Path) -> BulkChecklistResult:
    """Load a bulk checklist from a CSV file with a header row.

    The header must name the ``title``, ``description`` and ``category`` columns;
    ``priority`` defaults to ``medium`` and ``status`` to ``pending``.
    Lines starting with ``#`` are comments.
    """
    records = _read_records(csv_path)
    if len(records) < 2:
        raise ValueError("CSV must have a header and at least one data row")

    columns = {name.strip().lower(): index for index, name in enumerate(records[0])}
    for required in REQUIRED_FIELDS:
        if required not in columns:
            raise ValueError(f"required field '{required}' not found in CSV")

    def value(record: list[str], name: str) -> str:
        index = columns.get(name)
        if index is None or index >= len(record):
            return ""
        return record[index].strip()

    started = time.monotonic()
    result = BulkChecklistResult(generated_at=datetime.now())
    for record in records[1:]:
        result.add(
            BulkChecklistItem(
                title=value(record, "title"),
                description=value(record, "description"),
                category=value(record, "category"),
                priority=value(record, "priority") or "medium",
                status=value(record, "status") or "pending",
                notes=value(record, "notes"),
            )
        )
    result.execution_time = timedelta(seconds=time.monotonic() - started)
    return result


def _format_duration(duration: timedelta) -> str:
    """Round to whole seconds and format as hours, minutes and seconds."""
    microseconds = duration // timedelta(microseconds=1)
    sign = "-" if microseconds < 0 else ""
    seconds = (abs(microseconds) + 500_000) // 1_000_000
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def priority_icon(priority: str) -> str:
    """Return the icon shown for a priority."""
    key = priority.lower()
    if key in ("high", "alta"):
        return "🔴"
    if key in ("medium", "media"):
        return "🟡"
    if key in ("low", "baixa"):
        return "🟢"
    return "⚪"


def status_icon(status: str) -> str:
    """Return the icon shown for a status."""
    key = status.lower()
    if key in ("completed", "done", "ok", "concluido"):
        return "✅"
    if key in ("pending", "pendente"):
        return "⏳"
    if key in ("failed", "error", "falha"):
        return "❌"
    if key in ("in_progress", "em_andamento"):
        return "🔄"
    return "⚪"


def render_bulk_checklist_markdown(result: BulkChecklistResult) -> str:
    """Render a bulk checklist result as a Markdown report."""
    lines: list[str] = [
        "# Checklist em Massa - Resultados\n\n",
        f"**Data de Geração:** {result.generated_at:%Y-%m-%d %H:%M:%S}\n",
        f"**Tempo de Execução:** {_format_duration(result.execution_time)}\n\n",
        "---\n\n",
        "## 📊 Estatísticas\n\n",
        "| Métrica | Valor |\n",
        "|---------|-------|\n",
        f"| Total de Itens | {result.total_items} |\n",
        f"| ✅ Concluídos | {result.completed} |\n",
        f"| ⏳ Pendentes | {result.pending} |\n",
        f"| ❌ Falhas | {result.failed} |\n",
        "\n",
    ]

    categories: dict[str, list[BulkChecklistItem]] = {}
    for item in result.items:
        categories.setdefault(item.category or UNCATEGORIZED, []).append(item)

    lines.append("## 📋 Itens por Categoria\n\n")
    for category, items in categories.items():
        lines.append(f"### {category}\n\n")
        lines.append("| Título | Prioridade | Status | Notas |\n")
        lines.append("|--------|------------|--------|-------|\n")
        for item in items:
            notes = item.notes
            if len(notes) > NOTES_PREVIEW_LENGTH:
                notes = notes[:NOTES_PREVIEW_LENGTH] + "..."
            lines.append(
                f"| {item.title} | {priority_icon(item.priority)} {item.priority} "
                f"| {status_icon(item.status)} {item.status} | {notes} |\n"
            )
        lines.append("\n")

    lines.append("## 📝 Detalhes Completos\n\n")
    for number, item in enumerate(result.items, start=1):
        lines.append(f"### {number}. {item.title}\n\n")
        lines.append(f"**Categoria:** {item.category}  \n")
        lines.append(f"**Prioridade:** {item.priority}  \n")
        lines.append(f"**Status:** {item.status}  \n")
        lines.append(f"**Descrição:** {item.description}  \n\n")
        if item.notes:
            lines.append(f"**Notas:** {item.notes}  \n\n")
        lines.append("---\n\n")

    return "".join(lines)


def export_bulk_checklist_to_markdown(
    result: BulkChecklistResult,
    filename: str = "",
    export_dir: str | Path | None = None,
) -> Path:
    """Write the Markdown report and return the path of the file.

    ``filename`` defaults to a timestamped name and gets a ``.md`` suffix if it
    lacks one; ``export_dir`` defaults to ``~/.snip/exports``.
    """
    if not filename:
        filename = f"bulk_checklist_{datetime.now():%Y%m%d_%H%M%S}.md"
    if not filename.lower().endswith(".md"):
        filename += ".md"

    directory = (
        Path(export_dir) if export_dir is not None else Path.home() / ".snip" / "exports"
    )
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(render_bulk_checklist_markdown(result), encoding="utf-8")
    return path


def _coerce_type(checklist_type: ChecklistType | str) -> ChecklistType | None:
    try:
        return ChecklistType(checklist_type)
    except ValueError:
        return None


def generate_csv_template(
    checklist_type: ChecklistType | str, output_path: str | Path
) -> None:
    """Write a CSV template with sample rows; unknown kinds get the generic one."""
    kind = _coerce_type(checklist_type) or ChecklistType.GENERIC
    headers, rows = _TEMPLATES[kind]
    with open(output_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(headers)
        writer.writerows(rows)


def available_checklist_types() -> list[ChecklistType]:
    """Return every checklist kind, generic first."""
    return list(ChecklistType)


def checklist_type_description(checklist_type: ChecklistType | str) -> str:
    """Return the description of a checklist kind, or an empty string."""
    kind = _coerce_type(checklist_type)
    return _DESCRIPTIONS.get(kind, "") if kind is not None else ""