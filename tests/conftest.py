from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from dam_license.core.config import CreativeCommonsSettings, ScriptSettings, WorldSettings
from dam_license.core.context import Context
from dam_license.core.world import World, create_world
from dam_license.functions import item_functions
from dam_license.models.content import ItemComponent
from dam_license.plugin import LicensePlugin


LICENSE_RDF = """<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" xmlns:cc="http://creativecommons.org/ns#">
  <cc:License rdf:about="http://creativecommons.org/licenses/by-nc-sa/4.0/">
    <cc:permits rdf:resource="http://creativecommons.org/ns#Reproduction"/>
  </cc:License>
</rdf:RDF>"""


@pytest.fixture
def world_settings(tmp_path: Path) -> WorldSettings:
    """Settings of a world backed by a per-test SQLite database and asset directory."""
    return WorldSettings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        asset_storage_path=tmp_path / "assets",
        creative_commons=CreativeCommonsSettings(),
        scripts=ScriptSettings(core_pool_size=2),
    )


@pytest_asyncio.fixture
async def world(world_settings: WorldSettings) -> AsyncGenerator[World, None]:
    """A world with the license plugin and freshly created tables."""
    test_world = create_world("test", world_settings, plugins=[LicensePlugin()])
    await test_world.create_db_and_tables()
    yield test_world
    await test_world.close()


@pytest_asyncio.fixture
async def admin_context(world: World) -> AsyncGenerator[Context, None]:
    """A context with authorization checks switched off, committed after the test."""
    async with world.context(ignore_authorization=True) as context:
        yield context


@pytest_asyncio.fixture
async def item(admin_context: Context) -> ItemComponent:
    """An item with a title, created in `admin_context`."""
    new_item = await item_functions.create_item(admin_context.session, handle="123456789/1")
    await item_functions.add_metadata(admin_context, new_item.entity_id, "dc", "title", None, "en", "A test item")
    return new_item


@pytest.fixture
def license_rdf() -> str:
    """A minimal Creative Commons license RDF document."""
    return LICENSE_RDF
