"""
CLI formatting functions for human-readable output.

JSON is the default. YAML goes through PyYAML and tables through Rich.
"""

import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table

INSTANCE_COLUMNS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Status", "status"),
    ("Type", "instance_type_code"),
    ("Cloud", "cloud_id"),
    ("Group", "group_id"),
    ("Plan", "plan_id"),
]


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "instances" in data:
        return format_instances_table(data["instances"])
    elif isinstance(data, dict) and "id" in data:
        return format_instances_table([data])
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def format_instances_table(instances: List[Dict[str, Any]]) -> str:
    """Format instances as a table using Rich."""
    if not instances:
        return "No instances found."

    table = Table(show_header=True, header_style="bold magenta")
    for title, _ in INSTANCE_COLUMNS:
        table.add_column(title)

    for instance in instances:
        table.add_row(*[
            "N/A" if instance.get(key) is None else str(instance.get(key))
            for _, key in INSTANCE_COLUMNS
        ])

    console = Console(width=120, legacy_windows=False, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()
