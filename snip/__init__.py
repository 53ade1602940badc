"""Database operations toolkit: checklists, analysis records, cloud inventories, charts and Confluence."""

__version__ = "0.1.0"