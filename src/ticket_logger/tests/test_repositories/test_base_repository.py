import pytest
from sqlalchemy import select

from ticket_logger.exceptions import (
    ConflictError,
    InvalidFieldError,
    NotFoundError,
    ValidationError,
)
from ticket_logger.models import Region


@pytest.mark.asyncio
class TestBaseRepositoryCreate:

    async def test_create_success(self, base_repo, db_session):
        region = await base_repo.create(code="01", name="Andalucía")

        assert region.id is not None
        assert region.code == "01"
        assert region.image_path is None

        # row is visible through a fresh query in the same transaction
        result = await db_session.execute(select(Region).where(Region.id == region.id))
        assert result.scalar_one().name == "Andalucía"

    async def test_create_missing_required_field_raises_error(self, base_repo):
        with pytest.raises(ValidationError) as exc_info:
            await base_repo.create(code="01")

        assert exc_info.value.fields == ["name"]
        assert exc_info.value.error_code == "validation"

    async def test_create_with_unknown_field_raises_invalid_field(self, base_repo):
        with pytest.raises(InvalidFieldError) as exc_info:
            await base_repo.create(code="01", name="Andalucía", colour="green")

        assert exc_info.value.fields == ["colour"]
        assert exc_info.value.http_status() == 400

    async def test_create_accepts_attribute_key_not_column_name(self, base_repo):
        # Region.image_path is stored in the "image" column
        region = await base_repo.create(code="01", name="Andalucía", image_path="abc_map.png")
        assert region.image_path == "abc_map.png"

        with pytest.raises(InvalidFieldError):
            await base_repo.create(code="02", name="Aragón", image="abc.png")


@pytest.mark.asyncio
class TestBaseRepositoryCreateDuplicates:

    async def test_create_duplicate_code_raises_conflict(self, base_repo, db_session):
        await base_repo.create(code="01", name="Andalucía")
        await db_session.commit()

        with pytest.raises(ConflictError) as exc_info:
            await base_repo.create(code="01", name="Otra")

        assert exc_info.value.fields == ["code"]
        assert exc_info.value.error_code == "duplicate"
        assert exc_info.value.http_status() == 400

    async def test_constraint_wins_when_precheck_is_bypassed(self, base_repo, db_session, monkeypatch):
        """A lost check-then-act race surfaces as ConflictError from the UNIQUE constraint."""
        await base_repo.create(code="01", name="Andalucía")
        await db_session.commit()

        async def no_conflicts(*args, **kwargs):
            return set()

        monkeypatch.setattr(
            "ticket_logger.repositories.base_repository.find_unique_conflicts", no_conflicts
        )

        with pytest.raises(ConflictError) as exc_info:
            await base_repo.create(code="01", name="Otra")

        assert exc_info.value.fields == ["code"]
        # the session was rolled back and is usable again
        assert await base_repo.count() == 1


@pytest.mark.asyncio
class TestBaseRepositoryRead:

    async def test_get_by_id_returns_entity(self, base_repo, create_region):
        region = await create_region(code="01", name="Andalucía")
        found = await base_repo.get_by_id(region.id)
        assert found is not None
        assert found.code == "01"

    async def test_get_by_id_returns_none_for_missing(self, base_repo):
        assert await base_repo.get_by_id(999) is None

    async def test_get_by_id_or_raise_not_found(self, base_repo):
        with pytest.raises(NotFoundError) as exc_info:
            await base_repo.get_by_id_or_raise(999)

        assert exc_info.value.http_status() == 404
        assert "999" in exc_info.value.message

    async def test_get_by_id_or_raise_custom_message(self, base_repo):
        with pytest.raises(NotFoundError) as exc_info:
            await base_repo.get_by_id_or_raise(999, "Region not found")
        assert exc_info.value.message == "Region not found"


@pytest.mark.asyncio
class TestBaseRepositoryQuerying:

    @pytest.fixture
    async def three_regions(self, create_region):
        return [
            await create_region(code="03", name="Castilla"),
            await create_region(code="01", name="Andalucía"),
            await create_region(code="02", name="Baleares"),
        ]

    async def test_get_all_defaults_to_id_order(self, base_repo, three_regions):
        regions = await base_repo.get_all()
        assert [r.id for r in regions] == sorted(r.id for r in three_regions)

    async def test_get_all_sort_field_and_direction(self, base_repo, three_regions):
        by_name = await base_repo.get_all(sort="name")
        assert [r.name for r in by_name] == ["Andalucía", "Baleares", "Castilla"]

        by_code_desc = await base_repo.get_all(sort="code,desc")
        assert [r.code for r in by_code_desc] == ["03", "02", "01"]

    async def test_get_all_ignores_unknown_sort_field(self, base_repo, three_regions):
        regions = await base_repo.get_all(sort="provinces,desc")
        assert [r.id for r in regions] == sorted(r.id for r in three_regions)

    async def test_get_page_returns_items_and_total(self, base_repo, three_regions):
        items, total = await base_repo.get_page(page=0, size=2, sort="code")
        assert total == 3
        assert [r.code for r in items] == ["01", "02"]

        items, total = await base_repo.get_page(page=1, size=2, sort="code")
        assert [r.code for r in items] == ["03"]

        items, _ = await base_repo.get_page(page=5, size=2)
        assert items == []

    async def test_count_with_filters(self, base_repo, three_regions):
        assert await base_repo.count() == 3
        assert await base_repo.count(code="01") == 1
        assert await base_repo.count(code="99") == 0

        with pytest.raises(InvalidFieldError):
            await base_repo.count(colour="green")

    async def test_exists(self, base_repo, three_regions):
        assert await base_repo.exists(three_regions[0].id) is True
        assert await base_repo.exists(999) is False


@pytest.mark.asyncio
class TestBaseRepositoryUpdate:

    async def test_update_changes_field(self, base_repo, create_region):
        region = await create_region(code="01", name="Andalucia")
        updated = await base_repo.update(region.id, name="Andalucía")
        assert updated.name == "Andalucía"
        assert updated.code == "01"

    async def test_update_skips_none_values(self, base_repo, create_region):
        region = await create_region(code="01", name="Andalucía")
        updated = await base_repo.update(region.id, name=None)
        assert updated.name == "Andalucía"

    async def test_update_keeping_own_unique_value_is_allowed(self, base_repo, create_region):
        region = await create_region(code="01", name="Andalucía")
        updated = await base_repo.update(region.id, code="01", name="Andalusia")
        assert updated.name == "Andalusia"

    async def test_update_duplicate_raises(self, base_repo, create_region):
        await create_region(code="01", name="Andalucía")
        other = await create_region(code="02", name="Aragón")

        with pytest.raises(ConflictError) as exc_info:
            await base_repo.update(other.id, code="01")
        assert exc_info.value.fields == ["code"]

    async def test_update_with_invalid_field_raises(self, base_repo, create_region):
        region = await create_region()
        with pytest.raises(InvalidFieldError):
            await base_repo.update(region.id, colour="green")

    async def test_update_not_found_raises(self, base_repo):
        with pytest.raises(NotFoundError):
            await base_repo.update(999, name="x")


@pytest.mark.asyncio
class TestBaseRepositoryDelete:

    async def test_delete_success_and_no_longer_exists(self, base_repo, create_region, db_session):
        region = await create_region()
        assert await base_repo.delete(region.id) is True
        await db_session.commit()
        assert await base_repo.exists(region.id) is False

    async def test_delete_not_found_returns_false(self, base_repo):
        assert await base_repo.delete(999) is False
