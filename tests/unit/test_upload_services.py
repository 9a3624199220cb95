"""Tests for upload services."""
import pytest

from dboxpy.core.exceptions import ValidationError
from dboxpy.core.upload.services import (
    FileValidator,
    AsyncFileReader,
    PartFileWriter,
    part_file_name
)
from dboxpy.core.upload.strategies import FixedSizeChunkingStrategy


class TestFileValidator:
    """Test suite for FileValidator."""

    @pytest.fixture
    def validator(self):
        return FileValidator()

    def test_validate_existing_file(self, validator, make_file):
        path = make_file(size=12)
        validated, size = validator.validate(path)

        assert validated == path
        assert size == 12

    def test_validate_string_path(self, validator, make_file):
        path = make_file()
        validated, _ = validator.validate(str(path))

        assert validated == path

    def test_validate_nonexistent_file(self, validator, tmp_path):
        with pytest.raises(ValidationError, match="Couldn't find file"):
            validator.validate(tmp_path / "missing.txt")

    def test_validate_directory(self, validator, tmp_path):
        with pytest.raises(ValidationError, match="not a file"):
            validator.validate(tmp_path)

    @pytest.mark.parametrize("value", [None, ""])
    def test_validate_no_path(self, validator, value):
        with pytest.raises(ValidationError, match="No file path"):
            validator.validate(value)


class TestAsyncFileReader:
    """Test suite for AsyncFileReader."""

    @pytest.mark.asyncio
    async def test_read_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"0123456789ABCDEFGHIJ")

        assert await AsyncFileReader().read_file(path) == b"0123456789ABCDEFGHIJ"

    @pytest.mark.asyncio
    async def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            await AsyncFileReader().read_file(tmp_path / "missing.bin")


class TestPartFileWriter:
    """Test suite for PartFileWriter."""

    def test_part_file_name(self):
        assert part_file_name(0) == "part_00000"
        assert part_file_name(42) == "part_00042"
        assert part_file_name(3, prefix="chunk") == "chunk_00003"

    @pytest.mark.asyncio
    async def test_split_writes_ordered_parts(self, make_file, tmp_path):
        source = make_file(size=2500)
        chunks = FixedSizeChunkingStrategy(1000).calculate_chunks(2500)
        writer = PartFileWriter(work_dir=tmp_path / "work")

        parts = await writer.split(source, chunks)

        assert [p.name for p in parts] == ["part_00000", "part_00001", "part_00002"]
        assert [p.stat().st_size for p in parts] == [1000, 1000, 500]
        assert b"".join(p.read_bytes() for p in parts) == source.read_bytes()
        assert writer.directory.parent == tmp_path / "work"
        writer.cleanup()

    @pytest.mark.asyncio
    async def test_cleanup_removes_parts_and_directory(self, make_file, tmp_path):
        source = make_file(size=300)
        chunks = FixedSizeChunkingStrategy(100).calculate_chunks(300)
        writer = PartFileWriter(work_dir=tmp_path)

        parts = await writer.split(source, chunks)
        directory = writer.directory
        writer.cleanup()

        assert not any(p.exists() for p in parts)
        assert not directory.exists()
        assert writer.parts == []
        assert writer.directory is None

    @pytest.mark.asyncio
    async def test_cleanup_tolerates_missing_parts(self, make_file, tmp_path):
        source = make_file(size=200)
        chunks = FixedSizeChunkingStrategy(100).calculate_chunks(200)
        writer = PartFileWriter(work_dir=tmp_path)

        parts = await writer.split(source, chunks)
        parts[0].unlink()
        writer.cleanup()

        assert list(tmp_path.glob("dboxpy-*")) == []

    @pytest.mark.asyncio
    async def test_split_failure_keeps_parts_for_cleanup(self, make_file, tmp_path):
        """A plan larger than the file fails but registers what it wrote."""
        source = make_file(size=150)
        chunks = FixedSizeChunkingStrategy(100).calculate_chunks(250)
        writer = PartFileWriter(work_dir=tmp_path)

        with pytest.raises(OSError, match="Unexpected end of file"):
            await writer.split(source, chunks)

        assert len(writer.parts) == 2
        writer.cleanup()
        assert list(tmp_path.glob("dboxpy-*")) == []

    @pytest.mark.asyncio
    async def test_private_directories(self, make_file, tmp_path):
        """Two writers sharing a work dir never share part files."""
        source = make_file(size=100)
        chunks = FixedSizeChunkingStrategy(100).calculate_chunks(100)
        first, second = PartFileWriter(tmp_path), PartFileWriter(tmp_path)

        await first.split(source, chunks)
        await second.split(source, chunks)

        assert first.directory != second.directory
        first.cleanup()
        assert second.parts[0].exists()
        second.cleanup()
