import pytest

from globalchain.storage_directory import StorageDirectory, StorageDirectoryError


@pytest.mark.asyncio
async def test_create_makes_directory(tmp_path):
    target = tmp_path / "a" / "b"
    storage = await StorageDirectory.create(target, "Mainblock")
    assert target.is_dir()
    assert storage.path == target
    assert storage.last_index is None


@pytest.mark.asyncio
async def test_save_load_round_trip(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Chunk")
    await storage.save_bytes_to_file("file.bin", b"payload")
    assert await storage.load_bytes_from_file("file.bin") == b"payload"
    assert await storage.file_exists("file.bin") is True
    assert await storage.file_exists("other.bin") is False


@pytest.mark.asyncio
async def test_load_missing_file(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Chunk")
    with pytest.raises(StorageDirectoryError, match="File not found"):
        await storage.load_bytes_from_file("absent")


@pytest.mark.asyncio
async def test_list_files_ignores_directories(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Chunk")
    await storage.save_bytes_to_file("b", b"2")
    await storage.save_bytes_to_file("a", b"1")
    (tmp_path / "subdir").mkdir()
    files = await storage.list_files()
    assert [p.name for p in files] == ["a", "b"]


@pytest.mark.asyncio
async def test_init_empty_directory_has_no_index(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Mainblock")
    await storage.init()
    assert storage.last_index is None


@pytest.mark.asyncio
async def test_init_finds_highest_index(tmp_path):
    for name in ["Mainblock0", "Mainblock7", "Mainblock3", "Mainblockxyz", "Other9"]:
        (tmp_path / name).write_bytes(b"x")
    storage = await StorageDirectory.create(tmp_path, "Mainblock")
    await storage.init()
    assert storage.last_index == 7


@pytest.mark.asyncio
async def test_first_chunk_goes_to_index_zero(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Mainblock")
    await storage.init()
    await storage.add_chunk(b"first")
    assert storage.last_index == 0
    assert await storage.get_chunk(0) == b"first"
    assert (tmp_path / "Mainblock0").read_bytes() == b"first"


@pytest.mark.asyncio
async def test_add_chunk_writes_at_current_index_then_advances(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Mainblock")
    await storage.add_chunk(b"first")
    await storage.add_chunk(b"second")
    assert storage.last_index == 1
    assert await storage.get_chunk(0) == b"second"
    await storage.add_chunk(b"third")
    assert storage.last_index == 2
    assert await storage.get_chunk(1) == b"third"


@pytest.mark.asyncio
async def test_get_missing_chunk_fails(tmp_path):
    storage = await StorageDirectory.create(tmp_path, "Mainblock")
    with pytest.raises(StorageDirectoryError):
        await storage.get_chunk(5)