"""Imports item metadata from a CSV file written by metadata-export."""

import csv
import logging
from pathlib import Path

from dam_license.core.context import Context
from dam_license.functions import item_functions
from dam_license.scripts.metadata_export import VALUE_SEPARATOR
from dam_license.scripts.runner import ScriptResult, ScriptRunner

logger = logging.getLogger(__name__)

RESERVED_COLUMNS = ("id", "handle")


class MetadataImportRunner(ScriptRunner):
    """
    Replace item metadata with the values of a CSV file.

    Usage: ``metadata-import FILE``. Every field column replaces that field on the
    item in the ``id`` column; a blank cell clears the field. The handle column
    is ignored. The whole import runs in one transaction.
    """

    name = "metadata-import"
    description = "Import item metadata from CSV."

    async def execute(self, context: Context, args: list[str]) -> ScriptResult:
        if len(args) != 1:
            raise ValueError("Usage: metadata-import FILE")
        input_path = Path(args[0])

        with input_path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None or "id" not in reader.fieldnames:
                raise ValueError(f"{input_path} has no 'id' column.")
            field_columns = [c for c in reader.fieldnames if c not in RESERVED_COLUMNS]
            parsed_fields = {c: item_functions.parse_field_name(c) for c in field_columns}
            rows = list(reader)

        items_updated = 0
        values_written = 0
        for row in rows:
            item_id = int(row["id"])
            await item_functions.get_item(context.session, item_id)
            for column, (schema, element, qualifier) in parsed_fields.items():
                await item_functions.clear_metadata(context, item_id, schema, element, qualifier)
                cell = (row.get(column) or "").strip()
                if not cell:
                    continue
                values = [v for v in cell.split(VALUE_SEPARATOR) if v]
                await item_functions.add_metadata(context, item_id, schema, element, qualifier, None, values)
                values_written += len(values)
            items_updated += 1

        logger.info("Imported %d value(s) into %d item(s) from %s.", values_written, items_updated, input_path)
        return ScriptResult(
            script_name=self.name,
            message=f"Updated {items_updated} item(s) from {input_path}.",
            counts={"items": items_updated, "values": values_written},
        )
