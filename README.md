# snip

A toolkit for database administrators. It keeps notes and checklists in a
local SQLite store, generates maintenance checklists for Oracle, SQL Server,
MySQL, PostgreSQL and MongoDB, processes bulk checklists from CSV files,
lists managed databases on AWS, Azure, GCP and OCI through their command-line
tools, renders charts as ASCII, HTML or Markdown tables, and publishes pages
to Confluence.

Requires Python 3.10 or later. The only runtime dependency is `requests`.

## Local store

```python
from snip import storage

conn = storage.connect(storage.get_db_path("/path/to/data"))
```

`connect` creates every table, index and full-text trigger the toolkit uses,
so the file is ready to use straight away. Without a path it opens
`~/.snip/notes.db`. `ensure_schema` can be applied to any open `sqlite3`
connection as well.

## Analysis records

`snip.analysis_types` defines the `DatabaseType`, `AnalysisType` and
`OutputType` enumerations and the `DBAnalysis` record. `new_db_analysis`
creates a pending record and rejects unknown kinds with `ValueError`.

## Database checklists

```python
from snip.analysis_types import DatabaseType
from snip.dbchecklist import ChecklistGenerator, ChecklistLevel

checklist = ChecklistGenerator().generate_checklist(
    DatabaseType.POSTGRESQL, ChecklistLevel.WEEKLY
)
print(checklist.format_checklist())
```

Daily checklists hold the routine checks; weekly ones add periodic reviews;
deep ones add full audits, capacity analysis and restore tests.

## Bulk checklists from CSV

```python
from snip import bulk

bulk.generate_csv_template(bulk.ChecklistType.BACKUP, "backup.csv")
result = bulk.process_bulk_checklist_from_csv("backup.csv")
print(result.total_items, result.completed, result.pending, result.failed)

path = bulk.export_bulk_checklist_to_markdown(result, "backup_report", "/path/to/exports")
```

The CSV needs at least the `title`, `description` and `category` columns.
Missing priorities default to `medium` and missing statuses to `pending`.
`render_bulk_checklist_markdown` returns the report as a string without
writing it. `available_checklist_types()` and `checklist_type_description()`
describe the templates on offer.

## Cloud inventories

```python
from snip.cloud.aws import AWSClient, AWSConfig

client = AWSClient(AWSConfig(region="us-east-1", profile="default"))
for db in client.list_databases():
    print(db.identifier, db.engine, f"{db.cost:.2f}")
```

`AzureClient`, `GCPClient` and `OCIClient` work the same way. Each calls the
provider's own command-line tool (`aws`, `az`, `gcloud`, `oci`), which must be
installed and signed in. Monthly costs are rough estimates.

## Charts

```python
from snip.charts import ChartData, ChartType, Series, render_chart

data = ChartData(
    labels=["mon", "tue", "wed"],
    series=[Series(name="connections", values=[12, 30, 21])],
    title="Active connections",
    x_axis="day",
    y_axis="count",
    chart_type=ChartType.TABLE,
)
print(render_chart(data))
```

`parse_chart_data` and `parse_chart_suggestion` read chart data and a
suggested chart type from JSON text, with or without Markdown code fences
around it, and raise `ValueError` when the text is not a JSON object.

## Confluence

```python
from snip.confluence.client import ConfluenceClient
from snip.confluence.config import ConfluenceConfig

config = ConfluenceConfig(
    url="https://wiki.example.com",
    email="user@example.com",
    api_token="token",
    space="DB",
)
client = ConfluenceClient(config)
page = client.create_page("Weekly report", "<p>All checks passed.</p>", "")
```

`load_config` and `save_config` keep the settings in a JSON file readable only
by its owner. API failures raise `ConfluenceError` carrying the status code and
response body.

## What it does not do

- There is no command-line program; everything is used from Python.
- It does not connect to the databases it describes: `DBAnalysis` is only a
  record, and no analysis is run against a live server.
- It does not call any text-generation service. The chart parsers only read
  JSON text obtained elsewhere.
- The local store is created with its schema, but no functions for reading
  or writing notes, tags or projects are provided.