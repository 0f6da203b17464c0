"""Exports item metadata to a CSV file."""

import csv
import logging
from pathlib import Path

from dam_license.core.context import Context
from dam_license.functions import item_functions
from dam_license.scripts.runner import ScriptResult, ScriptRunner

logger = logging.getLogger(__name__)

VALUE_SEPARATOR = "||"


class MetadataExportRunner(ScriptRunner):
    """
    Write one CSV row per item: ``id``, ``handle`` and one column per metadata field.

    Usage: ``metadata-export FILE [FIELD ...]``. Without fields every field any
    item carries is exported. Multiple values of a field are joined with ``||``.
    """

    name = "metadata-export"
    description = "Export item metadata to CSV."

    async def execute(self, context: Context, args: list[str]) -> ScriptResult:
        if not args:
            raise ValueError("Usage: metadata-export FILE [FIELD ...]")
        output_path = Path(args[0])
        requested_fields = args[1:]
        for field_name in requested_fields:
            item_functions.parse_field_name(field_name)

        rows: list[dict[str, str]] = []
        seen_fields: set[str] = set()
        for item in await item_functions.list_items(context.session):
            values_by_field: dict[str, list[str]] = {}
            for value in await item_functions.get_all_metadata(context.session, item.entity_id):
                values_by_field.setdefault(value.field_name, []).append(value.value)
            seen_fields.update(values_by_field)
            rows.append(
                {
                    "id": str(item.entity_id),
                    "handle": item.handle or "",
                    **{name: VALUE_SEPARATOR.join(values) for name, values in values_by_field.items()},
                }
            )

        fields = requested_fields or sorted(seen_fields)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["id", "handle", *fields], extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)

        logger.info("Exported %d item(s) with %d field(s) to %s.", len(rows), len(fields), output_path)
        return ScriptResult(
            script_name=self.name,
            message=f"Exported {len(rows)} item(s) to {output_path}.",
            counts={"items": len(rows), "fields": len(fields)},
        )
