import pytest
from conftest import FakeProvider, build_bout

from bout_tracker import (
    ActionDescriptor,
    ArgumentMismatchError,
    FetchError,
    InsertArgument,
    InvalidIndexError,
    MissingArgumentError,
    NotFoundError,
    Processor,
    RemoveArgument,
)

INSERT = ActionDescriptor.insert(100, 7)
REMOVE = ActionDescriptor.remove(100, 7)


@pytest.mark.asyncio
async def test_first_insert_tracks_fetched_bout(provider):
    processor = Processor(provider)

    bout = await processor.process(INSERT)

    assert bout.id == 1
    assert processor.tracked((100, 7)) is bout
    assert provider.calls == [(100, 7)]


@pytest.mark.asyncio
async def test_insert_assigns_player(provider):
    processor = Processor(provider)

    bout = await processor.process(INSERT, InsertArgument("nix", 3))

    assert bout.maps[2].player == "nix"


@pytest.mark.asyncio
async def test_same_id_keeps_previous_edits():
    provider = FakeProvider(build_bout(1))
    processor = Processor(provider)
    await processor.process(INSERT, InsertArgument("nix", 3))

    for _ in range(3):
        bout = await processor.process(INSERT)

    assert bout.maps[2].player == "nix"
    assert len(provider.calls) == 4


@pytest.mark.asyncio
async def test_new_id_replaces_bout_and_discards_edits():
    provider = FakeProvider(build_bout(1), build_bout(1), build_bout(2))
    processor = Processor(provider)

    bout = await processor.process(INSERT, InsertArgument("nix", 3))
    assert bout.render_maps().splitlines()[2] == "nix: Clubhouse"

    bout = await processor.process(INSERT)
    assert bout.render_maps().splitlines()[2] == "nix: Clubhouse"

    bout = await processor.process(INSERT)
    assert bout.id == 2
    assert bout.render_maps().splitlines()[2] == "3: Clubhouse"
    assert processor.tracked((100, 7)).id == 2


@pytest.mark.asyncio
async def test_fetch_error_propagates_without_touching_state(fetch_error):
    provider = FakeProvider(build_bout(1), fetch_error)
    processor = Processor(provider)
    await processor.process(INSERT, InsertArgument("nix", 1))

    with pytest.raises(FetchError):
        await processor.process(INSERT, InsertArgument("ace", 1))

    assert processor.tracked((100, 7)).maps[0].player == "nix"


@pytest.mark.asyncio
async def test_fetch_error_on_first_sighting_tracks_nothing(fetch_error):
    processor = Processor(FakeProvider(fetch_error))

    with pytest.raises(FetchError):
        await processor.process(INSERT)

    assert len(processor) == 0


@pytest.mark.asyncio
async def test_insert_with_index_zero_leaves_tracked_bout_unchanged(provider):
    processor = Processor(provider)
    await processor.process(INSERT, InsertArgument("nix", 2))

    with pytest.raises(InvalidIndexError):
        await processor.process(INSERT, InsertArgument("ace", 0))

    bout = processor.tracked((100, 7))
    assert [slot.player for slot in bout.maps] == [None, "nix", None, None, None]


@pytest.mark.asyncio
async def test_invalid_index_keeps_reconciliation(provider):
    processor = Processor(provider)

    with pytest.raises(InvalidIndexError):
        await processor.process(INSERT, InsertArgument("ace", 6))

    assert processor.tracked((100, 7)).id == 1


@pytest.mark.asyncio
async def test_insert_rejects_remove_argument_before_fetching(provider):
    processor = Processor(provider)

    with pytest.raises(ArgumentMismatchError):
        await processor.process(INSERT, RemoveArgument(1))

    assert provider.calls == []


@pytest.mark.asyncio
async def test_remove_on_untracked_key_is_not_found(provider):
    processor = Processor(provider)

    with pytest.raises(NotFoundError):
        await processor.process(REMOVE, RemoveArgument(1))

    assert provider.calls == []


@pytest.mark.asyncio
async def test_remove_requires_argument(provider):
    processor = Processor(provider)
    await processor.process(INSERT)

    with pytest.raises(MissingArgumentError):
        await processor.process(REMOVE)


@pytest.mark.asyncio
async def test_remove_rejects_insert_argument(provider):
    processor = Processor(provider)
    await processor.process(INSERT)

    with pytest.raises(ArgumentMismatchError):
        await processor.process(REMOVE, InsertArgument("nix", 1))


@pytest.mark.asyncio
async def test_remove_clears_slot_without_fetching(provider):
    processor = Processor(provider)
    await processor.process(INSERT, InsertArgument("nix", 4))

    bout = await processor.process(REMOVE, RemoveArgument(4))

    assert bout.maps[3].player is None
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_remove_invalid_index_leaves_state(provider):
    processor = Processor(provider)
    await processor.process(INSERT, InsertArgument("nix", 5))

    with pytest.raises(InvalidIndexError):
        await processor.process(REMOVE, RemoveArgument(6))

    assert processor.tracked((100, 7)).maps[4].player == "nix"


@pytest.mark.asyncio
async def test_keys_are_tracked_independently():
    provider = FakeProvider(build_bout(1), build_bout(9))
    processor = Processor(provider)

    await processor.process(INSERT, InsertArgument("nix", 1))
    other = await processor.process(ActionDescriptor.insert(100, 8))

    assert other.id == 9
    assert processor.tracked((100, 7)).maps[0].player == "nix"
    assert len(processor) == 2


@pytest.mark.asyncio
async def test_drop_entry_is_idempotent(provider):
    processor = Processor(provider)
    await processor.process(INSERT)

    processor.drop_entry((100, 7))
    processor.drop_entry((100, 7))

    assert (100, 7) not in processor
