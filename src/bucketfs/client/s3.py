"""S3 client backed by aioboto3.

Wraps an aioboto3 S3 client that stays open between `initialize` and
`close`, so bodies returned by ``get_object`` can be streamed after the call
returns.

Errors are translated at this boundary: HTTP 404 (``NoSuchKey``,
``NotFound``) becomes `NotFoundError`, everything else `ClientFault`.

Request options are filtered per operation against botocore's S3 service
model, so one set of adapter-wide options (``ACL``, ``CacheControl``, SSE
settings, ...) can be handed to every call and each operation receives only
the parameters it accepts.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from bucketfs.core.exceptions import ClientFault, NotFoundError, StorageClientError
from bucketfs.protocols.client import (
    CommonPrefix,
    DeleteObjectError,
    DeleteObjectsOutput,
    GetObjectOutput,
    Grant,
    Grantee,
    HeadObjectOutput,
    ListObjectsPage,
    ObjectAcl,
    PutObjectOutput,
    S3Object,
)

if TYPE_CHECKING:
    from bucketfs.core.config import Settings

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

# Parameters the client sets itself; never taken from options.
RESERVED_PARAMS = frozenset({"Bucket", "Key", "Body", "CopySource", "Delete", "Prefix", "Delimiter"})


class Aioboto3StorageClient:
    """Object-storage client for S3 and S3-compatible stores.

    Args:
        session: aioboto3 session; a default one is created when omitted.
        region_name: Bucket region.
        endpoint_url: Custom endpoint (MinIO, R2, LocalStack, ...).
        aws_access_key_id: Access key; the default credential chain is used
            when omitted.
        aws_secret_access_key: Secret key.
        page_size: ``MaxKeys`` for each listing page.
        s3_client: An already-open S3 client to use instead of opening one.
    """

    def __init__(
        self,
        session: aioboto3.Session | None = None,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        page_size: int = 1000,
        s3_client: Any = None,
    ) -> None:
        self._session = session or aioboto3.Session()
        self._page_size = page_size
        self._client_kwargs: dict[str, Any] = {}
        if region_name:
            self._client_kwargs["region_name"] = region_name
        if endpoint_url:
            self._client_kwargs["endpoint_url"] = endpoint_url
        if aws_access_key_id:
            self._client_kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            self._client_kwargs["aws_secret_access_key"] = aws_secret_access_key

        self._s3 = s3_client
        self._exit_stack: AsyncExitStack | None = None
        self._accepted_params: dict[str, frozenset[str]] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> Aioboto3StorageClient:
        return cls(
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            page_size=settings.list_page_size,
        )

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """Open the S3 client. Safe to call more than once."""
        if self._s3 is not None:
            return
        stack = AsyncExitStack()
        self._s3 = await stack.enter_async_context(self._session.client("s3", **self._client_kwargs))
        self._exit_stack = stack
        logger.debug(f"Opened S3 client ({self._client_kwargs.get('endpoint_url', 'aws')})")

    async def close(self) -> None:
        """Close the S3 client if this instance opened it."""
        if self._exit_stack is None:
            return
        await self._exit_stack.aclose()
        self._exit_stack = None
        self._s3 = None

    @property
    def s3(self) -> Any:
        if self._s3 is None:
            raise ClientFault("S3 client is not open; call initialize() first")
        return self._s3

    # --- Object Operations ---

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: Any,
        options: Mapping[str, Any] | None = None,
    ) -> PutObjectOutput:
        if isinstance(body, str):
            body = body.encode("utf-8")
        response = await self._call(
            "put_object", key, **self._accepted("PutObject", options), Bucket=bucket, Key=key, Body=body
        )
        return PutObjectOutput(etag=response.get("ETag"), version_id=response.get("VersionId"))

    async def get_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> GetObjectOutput:
        response = await self._call("get_object", key, **self._accepted("GetObject", options), Bucket=bucket, Key=key)
        return GetObjectOutput(body=response.get("Body"), **_head_fields(response))

    async def head_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> HeadObjectOutput:
        response = await self._call("head_object", key, **self._accepted("HeadObject", options), Bucket=bucket, Key=key)
        return HeadObjectOutput(**_head_fields(response))

    async def delete_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> None:
        await self._call("delete_object", key, **self._accepted("DeleteObject", options), Bucket=bucket, Key=key)

    async def delete_objects(
        self, bucket: str, keys: Sequence[str], options: Mapping[str, Any] | None = None
    ) -> DeleteObjectsOutput:
        response = await self._call(
            "delete_objects",
            None,
            **self._accepted("DeleteObjects", options),
            Bucket=bucket,
            Delete={"Objects": [{"Key": key} for key in keys], "Quiet": False},
        )
        return DeleteObjectsOutput(
            deleted=tuple(item["Key"] for item in response.get("Deleted", [])),
            errors=tuple(
                DeleteObjectError(key=item.get("Key", ""), code=item.get("Code"), message=item.get("Message"))
                for item in response.get("Errors", [])
            ),
        )

    async def copy_object(
        self,
        bucket: str,
        key: str,
        source_bucket: str,
        source_key: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        await self._call(
            "copy_object",
            source_key,
            **self._accepted("CopyObject", options),
            Bucket=bucket,
            Key=key,
            CopySource={"Bucket": source_bucket, "Key": source_key},
        )

    async def object_exists(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> bool:
        try:
            await self.head_object(bucket, key, options)
        except NotFoundError:
            return False
        return True

    # --- Listing ---

    async def list_objects_v2(
        self,
        bucket: str,
        prefix: str = "",
        delimiter: str | None = None,
        continuation_token: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> ListObjectsPage:
        params: dict[str, Any] = {
            **self._accepted("ListObjectsV2", options),
            "Bucket": bucket,
            "Prefix": prefix,
            "MaxKeys": self._page_size,
        }
        if delimiter:
            params["Delimiter"] = delimiter
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        response = await self._call("list_objects_v2", None, **params)
        return ListObjectsPage(
            contents=tuple(
                S3Object(
                    key=item["Key"],
                    last_modified=item.get("LastModified"),
                    etag=item.get("ETag"),
                    size=item.get("Size"),
                    storage_class=item.get("StorageClass"),
                )
                for item in response.get("Contents", [])
            ),
            common_prefixes=tuple(
                CommonPrefix(prefix=item["Prefix"]) for item in response.get("CommonPrefixes", [])
            ),
            next_continuation_token=(
                response.get("NextContinuationToken") if response.get("IsTruncated") else None
            ),
        )

    # --- ACL ---

    async def get_object_acl(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> ObjectAcl:
        response = await self._call(
            "get_object_acl", key, **self._accepted("GetObjectAcl", options), Bucket=bucket, Key=key
        )
        grants = []
        for item in response.get("Grants", []):
            grantee = item.get("Grantee")
            grants.append(
                Grant(
                    grantee=(
                        Grantee(
                            type=grantee.get("Type", ""),
                            uri=grantee.get("URI"),
                            id=grantee.get("ID"),
                            display_name=grantee.get("DisplayName"),
                            email_address=grantee.get("EmailAddress"),
                        )
                        if grantee
                        else None
                    ),
                    permission=item.get("Permission"),
                )
            )
        return ObjectAcl(grants=tuple(grants), owner_id=response.get("Owner", {}).get("ID"))

    async def put_object_acl(
        self, bucket: str, key: str, acl: str, options: Mapping[str, Any] | None = None
    ) -> None:
        params = {**self._accepted("PutObjectAcl", options), "Bucket": bucket, "Key": key, "ACL": acl}
        await self._call("put_object_acl", key, **params)

    # --- Internal helpers ---

    async def _call(self, method: str, key: str | None, **params: Any) -> dict[str, Any]:
        try:
            return await getattr(self.s3, method)(**params)
        except ClientError as e:
            raise translate_client_error(e, key) from e
        except BotoCoreError as e:
            raise ClientFault(str(e), key=key) from e

    def _accepted(self, operation: str, options: Mapping[str, Any] | None) -> dict[str, Any]:
        """The subset of ``options`` that ``operation`` takes as input."""
        if not options:
            return {}
        if operation not in self._accepted_params:
            members = self.s3.meta.service_model.operation_model(operation).input_shape.members
            self._accepted_params[operation] = frozenset(members) - RESERVED_PARAMS
        accepted = self._accepted_params[operation]
        return {name: value for name, value in options.items() if name in accepted}


def translate_client_error(error: ClientError, key: str | None = None) -> StorageClientError:
    """Map a botocore ``ClientError`` onto the bucketfs error taxonomy.

    Example:
        >>> from botocore.exceptions import ClientError
        >>> err = ClientError({"Error": {"Code": "NoSuchKey", "Message": "gone"}}, "GetObject")
        >>> type(translate_client_error(err, "a.txt")).__name__
        'NotFoundError'
    """
    details = error.response.get("Error", {})
    code = details.get("Code")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    message = details.get("Message") or str(error)
    if status == 404 or code in NOT_FOUND_CODES:
        return NotFoundError(message, key=key, code=code)
    return ClientFault(message, key=key, status_code=status, code=code)


def _head_fields(response: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "content_length": response.get("ContentLength"),
        "content_type": response.get("ContentType"),
        "metadata": response.get("Metadata"),
        "storage_class": response.get("StorageClass"),
        "etag": response.get("ETag"),
        "version_id": response.get("VersionId"),
        "last_modified": response.get("LastModified"),
    }
