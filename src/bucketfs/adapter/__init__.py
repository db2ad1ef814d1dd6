"""Filesystem adapter over object storage."""

from bucketfs.adapter.emulation import emulate_directories
from bucketfs.adapter.normalizer import RESULT_MAP, ResponseNormalizer, translate
from bucketfs.adapter.s3 import DELETE_BATCH_SIZE, S3Adapter

__all__ = [
    "S3Adapter",
    "DELETE_BATCH_SIZE",
    "ResponseNormalizer",
    "RESULT_MAP",
    "translate",
    "emulate_directories",
]
