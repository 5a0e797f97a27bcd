"""
BlogApp Client Core — Blog Data Source Tests
=============================================

What:  Tests for the Supabase blog adapter and the offline snapshot.
How:   The remote source runs against the `mock_supabase` fixture; the local
       source runs against a real CacheBox in a temp directory.

What we test:
    ✅ Image upload names the object after the blog id and returns the public URL
    ✅ Insert maps the stored row back to a Blog
    ✅ Fetch-all attaches the joined author name
    ✅ Every backend exception becomes a ServerError with the original message
    ✅ Snapshot round-trip is field-for-field identical and overwrites
"""

import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

from blogapp.core.cache_box import CacheBox
from blogapp.datasources.blog_local import BlogLocalDataSourceImpl
from blogapp.datasources.blog_remote import BlogRemoteDataSourceImpl, guess_content_type
from blogapp.exceptions import CacheError, ServerError


class TestBlogRemoteUploadImage:
    @pytest.mark.asyncio
    async def test_upload_bytes_returns_public_url(self, mock_supabase, sample_blog, sample_image_bytes):
        source = BlogRemoteDataSourceImpl(mock_supabase)

        url = await source.upload_blog_image(sample_image_bytes, sample_blog)

        assert url.endswith(sample_blog.id)
        mock_supabase.storage.from_.assert_called_with("blog_images")
        bucket = mock_supabase.storage.from_.return_value
        bucket.upload.assert_awaited_once_with(
            path=sample_blog.id,
            file=sample_image_bytes,
            file_options={"content-type": guess_content_type(sample_image_bytes)},
        )
        bucket.get_public_url.assert_awaited_once_with(sample_blog.id)

    @pytest.mark.asyncio
    async def test_upload_from_path_reads_file(self, mock_supabase, sample_blog, tmp_path):
        image_path = tmp_path / "cover.png"
        image_path.write_bytes(b"\x89PNG\r\n\x1a\n rest")
        source = BlogRemoteDataSourceImpl(mock_supabase, images_bucket="covers")

        await source.upload_blog_image(image_path, sample_blog)

        mock_supabase.storage.from_.assert_called_with("covers")
        kwargs = mock_supabase.storage.from_.return_value.upload.await_args.kwargs
        assert kwargs["file"] == b"\x89PNG\r\n\x1a\n rest"
        assert kwargs["file_options"] == {
            "content-type": guess_content_type(b"\x89PNG\r\n\x1a\n rest", "cover.png")
        }

    @pytest.mark.asyncio
    async def test_upload_failure_becomes_server_error(self, mock_supabase, sample_blog, sample_image_bytes):
        mock_supabase.storage.from_.return_value.upload = AsyncMock(
            side_effect=RuntimeError("Bucket not found")
        )
        source = BlogRemoteDataSourceImpl(mock_supabase)

        with pytest.raises(ServerError) as exc_info:
            await source.upload_blog_image(sample_image_bytes, sample_blog)

        assert exc_info.value.message == "Bucket not found"
        assert exc_info.value.context["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_missing_file_becomes_server_error(self, mock_supabase, sample_blog, tmp_path):
        source = BlogRemoteDataSourceImpl(mock_supabase)

        with pytest.raises(ServerError):
            await source.upload_blog_image(tmp_path / "missing.jpg", sample_blog)

        mock_supabase.storage.from_.return_value.upload.assert_not_awaited()


class TestBlogRemoteUploadBlog:
    @pytest.mark.asyncio
    async def test_insert_returns_stored_row(self, mock_supabase, sample_blog, make_row):
        stored_row = {**make_row(sample_blog), "title": "Hello (stored)"}
        table = mock_supabase.table.return_value
        table.insert.return_value.execute = AsyncMock(return_value=MagicMock(data=[stored_row]))
        source = BlogRemoteDataSourceImpl(mock_supabase)

        stored = await source.upload_blog(sample_blog)

        mock_supabase.table.assert_called_with("blogs")
        table.insert.assert_called_once_with(sample_blog.to_row())
        assert stored.id == sample_blog.id
        assert stored.title == "Hello (stored)"
        assert stored.poster_name is None

    @pytest.mark.asyncio
    async def test_empty_insert_response_is_server_error(self, mock_supabase, sample_blog):
        source = BlogRemoteDataSourceImpl(mock_supabase)

        with pytest.raises(ServerError, match="returned no row"):
            await source.upload_blog(sample_blog)

    @pytest.mark.asyncio
    async def test_insert_exception_message_is_kept(self, mock_supabase, sample_blog):
        mock_supabase.table.return_value.insert.return_value.execute = AsyncMock(
            side_effect=Exception("duplicate key value violates unique constraint")
        )
        source = BlogRemoteDataSourceImpl(mock_supabase)

        with pytest.raises(ServerError) as exc_info:
            await source.upload_blog(sample_blog)

        assert exc_info.value.message == "duplicate key value violates unique constraint"


class TestBlogRemoteGetAll:
    @pytest.mark.asyncio
    async def test_rows_mapped_with_poster_name(self, mock_supabase, make_blog, make_row):
        first, second = make_blog(title="A"), make_blog(title="B", topics=[])
        mock_supabase.table.return_value.select.return_value.execute = AsyncMock(
            return_value=MagicMock(data=[make_row(first, "Ada"), make_row(second, "Grace")])
        )
        source = BlogRemoteDataSourceImpl(mock_supabase)

        blogs = await source.get_all_blogs()

        mock_supabase.table.return_value.select.assert_called_once_with("*, profiles(name)")
        assert [b.title for b in blogs] == ["A", "B"]
        assert [b.poster_name for b in blogs] == ["Ada", "Grace"]
        assert blogs[1].topics == ()

    @pytest.mark.asyncio
    async def test_missing_profile_leaves_name_empty(self, mock_supabase, sample_blog, make_row):
        row = {**make_row(sample_blog), "profiles": None}
        mock_supabase.table.return_value.select.return_value.execute = AsyncMock(
            return_value=MagicMock(data=[row])
        )
        source = BlogRemoteDataSourceImpl(mock_supabase)

        blogs = await source.get_all_blogs()

        assert blogs[0].poster_name is None

    @pytest.mark.asyncio
    async def test_select_failure_becomes_server_error(self, mock_supabase):
        mock_supabase.table.return_value.select.return_value.execute = AsyncMock(
            side_effect=ConnectionError("Network unreachable")
        )
        source = BlogRemoteDataSourceImpl(mock_supabase)

        with pytest.raises(ServerError, match="Network unreachable"):
            await source.get_all_blogs()


class TestBlogRemoteDeleteImage:
    @pytest.mark.asyncio
    async def test_remove_uses_blog_id(self, mock_supabase, sample_blog):
        source = BlogRemoteDataSourceImpl(mock_supabase)

        await source.delete_blog_image(sample_blog)

        mock_supabase.storage.from_.return_value.remove.assert_awaited_once_with([sample_blog.id])


class TestGuessContentType:
    """Header-byte detection, plus the extension fallback without libmagic."""

    PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"

    def test_jpeg_detected_from_bytes(self, sample_image_bytes):
        pytest.importorskip("magic")

        assert guess_content_type(sample_image_bytes) == "image/jpeg"

    def test_content_wins_over_filename(self):
        pytest.importorskip("magic")

        assert guess_content_type(self.PNG_HEADER, "photo.jpg") == "image/png"

    def test_extension_used_without_libmagic(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "magic", None)

        assert guess_content_type(self.PNG_HEADER, "photo.JPG") == "image/jpeg"
        assert guess_content_type(b"GIF89a", "anim.gif") == "image/gif"

    def test_unknown_without_libmagic(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "magic", None)

        assert guess_content_type(b"plain text") == "application/octet-stream"
        assert guess_content_type(b"plain text", "notes.txt") == "application/octet-stream"


class TestBlogLocalDataSource:
    @pytest.mark.asyncio
    async def test_empty_box_loads_empty_list(self, cache_box):
        source = BlogLocalDataSourceImpl(cache_box)

        assert await source.load_blogs() == []

    @pytest.mark.asyncio
    async def test_round_trip_is_identical(self, cache_box, sample_blogs):
        source = BlogLocalDataSourceImpl(cache_box)

        await source.upload_local_blogs(sample_blogs)
        loaded = await source.load_blogs()

        assert loaded == sample_blogs
        assert [b.poster_name for b in loaded] == ["Ada", "Grace"]
        assert loaded[0].updated_at == sample_blogs[0].updated_at

    @pytest.mark.asyncio
    async def test_save_overwrites_previous_snapshot(self, cache_box, sample_blogs, sample_blog):
        source = BlogLocalDataSourceImpl(cache_box)

        await source.upload_local_blogs(sample_blogs)
        await source.upload_local_blogs([sample_blog])

        assert await source.load_blogs() == [sample_blog]

    @pytest.mark.asyncio
    async def test_snapshot_survives_reopen(self, cache_box, sample_blogs, tmp_path):
        await BlogLocalDataSourceImpl(cache_box).upload_local_blogs(sample_blogs)

        reopened = await CacheBox.open("blogs", tmp_path)

        assert await BlogLocalDataSourceImpl(reopened).load_blogs() == sample_blogs

    @pytest.mark.asyncio
    async def test_corrupted_snapshot_raises_cache_error(self, cache_box):
        await cache_box.put("blogs", [{"id": "only-an-id"}])
        source = BlogLocalDataSourceImpl(cache_box)

        with pytest.raises(CacheError, match="Could not load saved blogs"):
            await source.load_blogs()

    @pytest.mark.asyncio
    async def test_write_failure_raises_cache_error(self, sample_blogs):
        box = MagicMock()
        box.name = "blogs"
        box.put = AsyncMock(side_effect=OSError("No space left on device"))
        source = BlogLocalDataSourceImpl(box)

        with pytest.raises(CacheError) as exc_info:
            await source.upload_local_blogs(sample_blogs)

        assert exc_info.value.context["error"] == "No space left on device"
