"""Tests for bucketfs.client.memory.

Tests cover:
- Object put/get/head/delete
- Delimiter grouping and continuation tokens
- Canned ACLs and their grants
- Error translation for missing keys and bad requests
"""

import io

import pytest

from bucketfs.client.memory import MemoryStorageClient, MemoryStream
from bucketfs.core.exceptions import ClientFault, NotFoundError
from bucketfs.protocols.client import ObjectStorageClient

BUCKET = "b"


@pytest.fixture
def client():
    """In-memory client."""
    return MemoryStorageClient()


class TestObjects:
    """Tests for object operations."""

    def test_satisfies_protocol(self, client):
        assert isinstance(client, ObjectStorageClient)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            MemoryStorageClient(page_size=0)

    async def test_put_and_get(self, client):
        put = await client.put_object(BUCKET, "a.txt", b"hello", {"ContentType": "text/plain"})
        assert put.etag.startswith('"')

        output = await client.get_object(BUCKET, "a.txt")
        assert output.content_length == 5
        assert output.content_type == "text/plain"
        assert output.etag == put.etag
        assert await output.body.read() == b"hello"

    async def test_put_file_like(self, client):
        await client.put_object(BUCKET, "a.bin", io.BytesIO(b"data"))
        head = await client.head_object(BUCKET, "a.bin")
        assert head.content_length == 4
        assert head.content_type is None

    async def test_head_missing(self, client):
        with pytest.raises(NotFoundError) as exc_info:
            await client.head_object(BUCKET, "missing")
        assert exc_info.value.code == "NoSuchKey"

    async def test_delete_object_missing_is_noop(self, client):
        await client.delete_object(BUCKET, "missing")
        assert not await client.object_exists(BUCKET, "missing")

    async def test_delete_objects(self, client):
        for key in ("a", "b", "c"):
            await client.put_object(BUCKET, key, b"")
        output = await client.delete_objects(BUCKET, ["a", "b"])
        assert list(output.deleted) == ["a", "b"]
        assert client.keys(BUCKET) == ["c"]

    async def test_delete_objects_limit(self, client):
        with pytest.raises(ClientFault):
            await client.delete_objects(BUCKET, [str(i) for i in range(1001)])

    async def test_copy_object(self, client):
        await client.put_object(BUCKET, "a", b"x", {"Metadata": {"k": "v"}, "ACL": "public-read"})
        await client.copy_object(BUCKET, "b", BUCKET, "a", {"ACL": "private"})
        head = await client.head_object(BUCKET, "b")
        assert head.metadata == {"k": "v"}
        assert not (await client.get_object_acl(BUCKET, "b")).is_public_read()
        assert (await client.get_object_acl(BUCKET, "a")).is_public_read()

    async def test_copy_missing(self, client):
        with pytest.raises(NotFoundError):
            await client.copy_object(BUCKET, "b", BUCKET, "a")

    async def test_buckets_isolated(self, client):
        await client.put_object("one", "k", b"")
        assert not await client.object_exists("two", "k")


class TestListing:
    """Tests for list_objects_v2."""

    async def test_delimiter_groups(self, client):
        for key in ("a/1", "a/2", "a/b/3", "c"):
            await client.put_object(BUCKET, key, b"")
        page = await client.list_objects_v2(BUCKET, prefix="", delimiter="/")
        assert [o.key for o in page.contents] == ["c"]
        assert [p.prefix for p in page.common_prefixes] == ["a/"]

        page = await client.list_objects_v2(BUCKET, prefix="a/", delimiter="/")
        assert [o.key for o in page.contents] == ["a/1", "a/2"]
        assert [p.prefix for p in page.common_prefixes] == ["a/b/"]

    async def test_no_delimiter_is_flat(self, client):
        for key in ("a/1", "a/b/3"):
            await client.put_object(BUCKET, key, b"x")
        page = await client.list_objects_v2(BUCKET, prefix="a/")
        assert [o.key for o in page.contents] == ["a/1", "a/b/3"]
        assert page.contents[0].size == 1
        assert not page.is_truncated

    async def test_continuation(self):
        client = MemoryStorageClient(page_size=2)
        for key in ("a", "b", "c"):
            await client.put_object(BUCKET, key, b"")

        first = await client.list_objects_v2(BUCKET)
        assert [o.key for o in first.contents] == ["a", "b"]
        assert first.is_truncated

        second = await client.list_objects_v2(BUCKET, continuation_token=first.next_continuation_token)
        assert [o.key for o in second.contents] == ["c"]
        assert second.next_continuation_token is None


class TestAcl:
    """Tests for object ACLs."""

    async def test_default_private(self, client):
        await client.put_object(BUCKET, "a", b"")
        acl = await client.get_object_acl(BUCKET, "a")
        assert not acl.is_public_read()
        assert acl.owner_id

    async def test_public_read(self, client):
        await client.put_object(BUCKET, "a", b"")
        await client.put_object_acl(BUCKET, "a", "public-read")
        assert (await client.get_object_acl(BUCKET, "a")).is_public_read()

    async def test_authenticated_read_is_not_public(self, client):
        await client.put_object(BUCKET, "a", b"", {"ACL": "authenticated-read"})
        assert not (await client.get_object_acl(BUCKET, "a")).is_public_read()

    async def test_invalid_acl(self, client):
        with pytest.raises(ClientFault) as exc_info:
            await client.put_object(BUCKET, "a", b"", {"ACL": "everyone"})
        assert exc_info.value.status_code == 400

    async def test_acl_missing_key(self, client):
        with pytest.raises(NotFoundError):
            await client.put_object_acl(BUCKET, "missing", "private")


class TestMemoryStream:
    """Tests for MemoryStream."""

    async def test_chunks(self):
        chunks = [chunk async for chunk in MemoryStream(b"abcde").iter_chunks(2)]
        assert chunks == [b"ab", b"cd", b"e"]

    async def test_context_closes(self):
        async with MemoryStream(b"x") as stream:
            assert await stream.read(1) == b"x"
        assert stream.closed
