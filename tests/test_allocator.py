"""Tests for short ID allocation."""

import pytest

from shortspace.allocator import IdentifierAllocator
from shortspace.database.sqlite import URLShortenerSQLite
from shortspace.errors import (
    CapacityExhaustedError,
    DuplicateIDError,
    InvalidInputError,
    StorageFaultError,
)
from shortspace.shortcode import ShortCodeGenerator


class SequenceGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of IDs."""

    def __init__(self, codes):
        super().__init__()
        self.codes = list(codes)
        self.calls = 0

    def generate(self, url, space, length=None):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


class BrokenLookupStore(URLShortenerSQLite):
    """Store whose existence check always fails."""

    async def short_code_exists(self, space, short_id):
        raise StorageFaultError("disk on fire")


class TestAllocate:
    """Test allocate()."""

    async def test_generated_id_is_free(self, allocator, test_db, sample_urls):
        short_id = await allocator.allocate("d", sample_urls[0])

        assert len(short_id) == 5
        assert not await allocator.exists("d", short_id)

        await test_db.create_short_url("d", short_id, sample_urls[0])
        assert await allocator.exists("d", short_id)

    async def test_custom_id_returned(self, allocator, sample_urls):
        assert await allocator.allocate("d", sample_urls[0], "mylink") == "mylink"

    async def test_taken_custom_id_conflicts_without_mutation(self, allocator, test_db, sample_urls):
        await test_db.create_short_url("d", "taken", sample_urls[0])

        with pytest.raises(DuplicateIDError):
            await allocator.allocate("d", sample_urls[1], "taken")

        record = await test_db.get_short_url("d", "taken")
        assert record.target_url == sample_urls[0]
        stats = await test_db.get_statistics("d")
        assert stats["total_urls"] == 1

    async def test_custom_id_in_other_space_is_free(self, allocator, test_db, sample_urls):
        await test_db.create_short_url("a", "abcde", sample_urls[0])

        assert await allocator.allocate("b", sample_urls[1], "abcde") == "abcde"

    async def test_invalid_custom_id(self, allocator, sample_urls):
        with pytest.raises(InvalidInputError):
            await allocator.allocate("d", sample_urls[0], "bad id!")

    async def test_custom_id_with_trailing_newline(self, allocator, test_db, sample_urls):
        with pytest.raises(InvalidInputError):
            await allocator.allocate("d", sample_urls[0], "abc\n")

        assert (await test_db.get_statistics("d"))["total_urls"] == 0

    async def test_collision_is_retried(self, test_db, sample_urls, logger):
        await test_db.create_short_url("d", "aaaaa", sample_urls[0])
        generator = SequenceGenerator(["aaaaa", "bbbbb"])
        allocator = IdentifierAllocator(test_db, generator, max_attempts=5, logger=logger)

        assert await allocator.allocate("d", sample_urls[1]) == "bbbbb"
        assert generator.calls == 2

    async def test_capacity_exhausted(self, test_db, sample_urls, logger):
        await test_db.create_short_url("d", "aaaaa", sample_urls[0])
        generator = SequenceGenerator(["aaaaa"])
        allocator = IdentifierAllocator(test_db, generator, max_attempts=3, logger=logger)

        with pytest.raises(CapacityExhaustedError):
            await allocator.allocate("d", sample_urls[1])
        assert generator.calls == 3


class TestExistsFailsClosed:
    """A failed lookup is treated as 'taken'."""

    @pytest.fixture
    def broken_allocator(self, partitions, clock, logger):
        store = BrokenLookupStore(partitions, clock=clock, logger=logger)
        return IdentifierAllocator(store, ShortCodeGenerator(), max_attempts=2, logger=logger)

    async def test_exists_reports_true_on_storage_fault(self, broken_allocator):
        assert await broken_allocator.exists("d", "anything") is True

    async def test_custom_id_refused_on_storage_fault(self, broken_allocator, sample_urls):
        with pytest.raises(DuplicateIDError):
            await broken_allocator.allocate("d", sample_urls[0], "mylink")

    async def test_generation_gives_up_on_storage_fault(self, broken_allocator, sample_urls):
        with pytest.raises(CapacityExhaustedError):
            await broken_allocator.allocate("d", sample_urls[0])
