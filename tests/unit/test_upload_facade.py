"""Tests for the upload facade."""
import pytest

from dboxpy.core.exceptions import IntegrityError, TransportError, ValidationError
from dboxpy.core.upload import UploadFacade, UploadRequest, UploadStrategy, WriteMode


def assert_no_remote_calls(api):
    api.upload.assert_not_called()
    api.upload_session_start.assert_not_called()
    api.upload_session_append.assert_not_called()
    api.upload_session_finish.assert_not_called()


class TestUploadFacade:
    """Test suite for UploadFacade."""

    @pytest.mark.asyncio
    async def test_small_file_upload(self, mock_api, make_file):
        """16 KiB file to the root in add mode."""
        path = make_file("file.txt", size=16384)
        facade = UploadFacade(mock_api)

        result = await facade.upload(path, "", WriteMode.ADD)

        commit = mock_api.upload.await_args.args[0]
        assert commit.to_dict() == {
            'path': '/file.txt',
            'mode': 'add',
            'autorename': False,
            'mute': False,
        }
        assert result.rev == "abc123"
        assert result.strategy is UploadStrategy.SINGLE_SHOT

    @pytest.mark.asyncio
    async def test_destination_folder(self, mock_api, make_file, file_metadata):
        path = make_file("report.pdf", size=10)
        mock_api.upload.return_value = file_metadata(name="report.pdf", folder="/Reports")

        result = await UploadFacade(mock_api).upload(path, "/Reports/")

        assert mock_api.upload.await_args.args[0].path == "/Reports/report.pdf"
        assert result.path == "/Reports/report.pdf"

    @pytest.mark.asyncio
    async def test_chunked_upload(self, mock_api, make_file):
        path = make_file("file.txt", size=4500)

        result = await UploadFacade(mock_api, chunk_size=1000).upload(path)

        assert result.chunk_count == 5
        assert mock_api.upload_session_append.await_count == 4

    @pytest.mark.asyncio
    async def test_name_mismatch(self, mock_api, make_file, file_metadata):
        """Dropbox renamed the object."""
        path = make_file("file.txt", size=100)
        mock_api.upload.return_value = file_metadata(name="file (1).txt")

        with pytest.raises(IntegrityError) as exc_info:
            await UploadFacade(mock_api).upload(path)

        assert exc_info.value.expected == "file.txt"
        assert exc_info.value.actual == "file (1).txt"

    @pytest.mark.asyncio
    async def test_missing_file(self, mock_api, tmp_path):
        with pytest.raises(ValidationError):
            await UploadFacade(mock_api).upload(tmp_path / "nope.txt")

        assert_no_remote_calls(mock_api)

    @pytest.mark.asyncio
    async def test_update_without_rev(self, mock_api, make_file):
        path = make_file(size=100)

        with pytest.raises(ValidationError, match="update_rev required"):
            await UploadFacade(mock_api).upload(path, write_mode=WriteMode.UPDATE)

        assert_no_remote_calls(mock_api)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, mock_api, make_file):
        path = make_file(size=100)
        mock_api.upload.side_effect = TransportError(
            "Dropbox API error on files/upload: 409 - path/conflict",
            status=409,
            endpoint="files/upload"
        )

        with pytest.raises(TransportError) as exc_info:
            await UploadFacade(mock_api).upload(path)

        assert exc_info.value.status == 409

    def test_prepare_is_offline(self, mock_api, make_file):
        path = make_file(size=5000)
        facade = UploadFacade(mock_api, chunk_size=1000)

        plan = facade.prepare(UploadRequest(file_path=path, destination_folder="Builds"))

        assert plan.is_chunked
        assert plan.commit.path == "/Builds/file.txt"
        assert_no_remote_calls(mock_api)
