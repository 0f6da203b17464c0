import csv
from pathlib import Path

import pytest

from dam_license.core.context import Context
from dam_license.core.exceptions import ItemNotFoundError, ScriptExecutionError, ScriptNotFoundError
from dam_license.core.world import World
from dam_license.functions import item_functions
from dam_license.scripts import ScriptExecutor, ScriptRegistry, ScriptResult, ScriptRunner


class FailingRunner(ScriptRunner):
    name = "always-fails"
    description = "Raises."

    async def execute(self, context: Context, args: list[str]) -> ScriptResult:
        raise RuntimeError("boom")


class CountingRunner(ScriptRunner):
    name = "count-items"

    async def execute(self, context: Context, args: list[str]) -> ScriptResult:
        items = await item_functions.list_items(context.session)
        return ScriptResult(script_name=self.name, message="counted", counts={"items": len(items)})


async def _create_items(world: World) -> tuple[int, int]:
    async with world.context(ignore_authorization=True) as context:
        first = await item_functions.create_item(context.session, handle="123456789/1")
        second = await item_functions.create_item(context.session)
        await item_functions.add_metadata(context, first.entity_id, "dc", "title", None, None, "First")
        await item_functions.add_metadata(context, first.entity_id, "dc", "subject", None, None, ["a", "b"])
        await item_functions.add_metadata(context, second.entity_id, "dc", "rights", "uri", None, "http://x")
        return first.entity_id, second.entity_id


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_registry() -> None:
    registry = ScriptRegistry()
    registry.register(CountingRunner)

    assert registry.names() == ["count-items"]
    assert registry.get("count-items") is CountingRunner
    with pytest.raises(ScriptNotFoundError):
        registry.get("missing")


@pytest.mark.asyncio
async def test_plugin_registers_default_scripts(world: World) -> None:
    registry = world.get_resource(ScriptRegistry)
    executor = world.get_resource(ScriptExecutor)

    assert registry.names() == ["metadata-export", "metadata-import"]
    assert executor.core_pool_size == 2


@pytest.mark.asyncio
async def test_executor_rejects_invalid_pool_size(world: World) -> None:
    with pytest.raises(ValueError):
        ScriptExecutor(world, ScriptRegistry(), core_pool_size=0)


@pytest.mark.asyncio
async def test_submit_runs_in_pool(world: World) -> None:
    await _create_items(world)
    registry = world.get_resource(ScriptRegistry)
    registry.register(CountingRunner)

    result = world.get_resource(ScriptExecutor).submit("count-items").result(timeout=30)

    assert result.counts == {"items": 2}


@pytest.mark.asyncio
async def test_submit_unknown_script(world: World) -> None:
    with pytest.raises(ScriptNotFoundError):
        world.get_resource(ScriptExecutor).submit("missing")


@pytest.mark.asyncio
async def test_failure_is_wrapped(world: World) -> None:
    world.get_resource(ScriptRegistry).register(FailingRunner)

    future = world.get_resource(ScriptExecutor).submit("always-fails", ["x"])

    with pytest.raises(ScriptExecutionError) as exc_info:
        future.result(timeout=30)
    error = exc_info.value
    assert error.script_name == "always-fails"
    assert error.script_args == ["x"]
    assert isinstance(error.original_exception, RuntimeError)
    assert "boom" in str(error)


@pytest.mark.asyncio
async def test_metadata_export(world: World, tmp_path: Path) -> None:
    first_id, second_id = await _create_items(world)
    output = tmp_path / "export.csv"

    result = world.get_resource(ScriptExecutor).submit("metadata-export", [str(output)]).result(timeout=30)

    assert result.counts == {"items": 2, "fields": 3}
    rows = _read_csv(output)
    assert list(rows[0]) == ["id", "handle", "dc.rights.uri", "dc.subject", "dc.title"]
    assert rows[0] == {
        "id": str(first_id),
        "handle": "123456789/1",
        "dc.rights.uri": "",
        "dc.subject": "a||b",
        "dc.title": "First",
    }
    assert rows[1]["id"] == str(second_id)
    assert rows[1]["dc.rights.uri"] == "http://x"


@pytest.mark.asyncio
async def test_metadata_export_selected_fields(world: World, tmp_path: Path) -> None:
    await _create_items(world)
    output = tmp_path / "export.csv"

    world.get_resource(ScriptExecutor).submit("metadata-export", [str(output), "dc.title"]).result(timeout=30)

    assert list(_read_csv(output)[0]) == ["id", "handle", "dc.title"]


@pytest.mark.asyncio
async def test_metadata_import(world: World, tmp_path: Path) -> None:
    first_id, second_id = await _create_items(world)
    input_path = tmp_path / "import.csv"
    input_path.write_text(
        "id,handle,dc.title,dc.subject\n"
        f"{first_id},123456789/1,New title,x||y||z\n"
        f"{second_id},,Second,\n",
        encoding="utf-8",
    )

    result = world.get_resource(ScriptExecutor).submit("metadata-import", [str(input_path)]).result(timeout=30)

    assert result.counts == {"items": 2, "values": 5}
    async with world.context(ignore_authorization=True) as context:
        session = context.session
        assert await item_functions.get_metadata_values(session, first_id, "dc", "title", None) == ["New title"]
        assert await item_functions.get_metadata_values(session, first_id, "dc", "subject", None) == ["x", "y", "z"]
        assert await item_functions.get_metadata_values(session, second_id, "dc", "title", None) == ["Second"]
        assert await item_functions.get_metadata_values(session, second_id, "dc", "subject", None) == []
        # Fields missing from the file are untouched.
        assert await item_functions.get_metadata_values(session, second_id, "dc", "rights", "uri") == ["http://x"]


@pytest.mark.asyncio
async def test_metadata_import_unknown_item_rolls_back(world: World, tmp_path: Path) -> None:
    first_id, _ = await _create_items(world)
    input_path = tmp_path / "import.csv"
    input_path.write_text(f"id,dc.title\n{first_id},Changed\n99999,Nope\n", encoding="utf-8")

    future = world.get_resource(ScriptExecutor).submit("metadata-import", [str(input_path)])

    with pytest.raises(ScriptExecutionError) as exc_info:
        future.result(timeout=30)
    assert isinstance(exc_info.value.original_exception, ItemNotFoundError)
    async with world.context(ignore_authorization=True) as context:
        assert await item_functions.get_metadata_values(context.session, first_id, "dc", "title", None) == ["First"]


@pytest.mark.asyncio
async def test_metadata_import_requires_file_argument(world: World) -> None:
    future = world.get_resource(ScriptExecutor).submit("metadata-import", [])

    with pytest.raises(ScriptExecutionError) as exc_info:
        future.result(timeout=30)
    assert isinstance(exc_info.value.original_exception, ValueError)
