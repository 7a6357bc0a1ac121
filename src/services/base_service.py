"""
Base service layer for unified MongoDB collection operations
"""

import logging
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from utils.helpers import parse_object_id, utc_now

logger = logging.getLogger(__name__)

# Error types surfaced to the API layer
INVALID_ID = "INVALID_ID"
VALIDATION_ERROR = "VALIDATION_ERROR"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
STORAGE_ERROR = "STORAGE_ERROR"

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data: List[Dict[str, Any]]) -> "ServiceResult":
        return cls(success=True, data=data, count=len(data))

    @classmethod
    def fail(cls, error: str, error_type: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

class BaseService:
    """Base service wrapping a single MongoDB collection.

    Every write stamps ``createdAt``/``updatedAt`` so records carry the same
    timestamps regardless of which operation produced them.
    """

    def __init__(self, resource_name: str, collection_getter):
        self.resource_name = resource_name
        self._collection_getter = collection_getter
        logger.info(f"BaseService initialized for resource: {resource_name}")

    @property
    def collection(self):
        return self._collection_getter()

    def _parse_id(self, record_id: str) -> Tuple[Optional[ObjectId], Optional[ServiceResult]]:
        oid = parse_object_id(record_id)
        if oid is None:
            return None, ServiceResult.fail(
                f"Invalid ID format: {record_id}",
                INVALID_ID
            )
        return oid, None

    def _not_found(self, record_id: str) -> ServiceResult:
        return ServiceResult.fail(
            f"Record not found with ID: {record_id}",
            RESOURCE_NOT_FOUND
        )

    def _storage_failure(self, operation: str, error: Exception) -> ServiceResult:
        logger.error(f"{operation} operation failed for {self.resource_name}: {error}", exc_info=True)
        return ServiceResult.fail(str(error), STORAGE_ERROR)

    async def create(self, data: Dict[str, Any]) -> ServiceResult:
        """
        Insert a new record

        Args:
            data: Field values to insert; None values are not stored

        Returns:
            ServiceResult with the created record
        """
        now = utc_now()
        document = {key: value for key, value in data.items() if value is not None}
        document["createdAt"] = now
        document["updatedAt"] = now

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            return self._storage_failure("Create", e)

        document["_id"] = result.inserted_id
        return ServiceResult.ok([document])

    async def read(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[List[Tuple[str, int]]] = None
    ) -> ServiceResult:
        """
        Read records matching a MongoDB filter

        Args:
            filters: MongoDB query document (default: all records)
            sort: List of (field, direction) pairs

        Returns:
            ServiceResult with matched records
        """
        try:
            cursor = self.collection.find(filters or {}, sort=sort)
            documents = [doc async for doc in cursor]
        except PyMongoError as e:
            return self._storage_failure("Read", e)

        return ServiceResult.ok(documents)

    async def get_by_id(self, record_id: str) -> ServiceResult:
        """
        Get a single record by its identifier

        Returns:
            ServiceResult with the record, INVALID_ID or RESOURCE_NOT_FOUND
        """
        oid, invalid = self._parse_id(record_id)
        if invalid:
            return invalid

        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            return self._storage_failure("Read", e)

        if document is None:
            return self._not_found(record_id)
        return ServiceResult.ok([document])

    async def update(
        self,
        record_id: str,
        data: Dict[str, Any],
        clear_missing: Optional[List[str]] = None
    ) -> ServiceResult:
        """
        Update a record by its identifier

        Args:
            record_id: Identifier of the record to update
            data: Field values to set; None values remove the field
            clear_missing: Fields to remove when absent from ``data``

        Returns:
            ServiceResult with the updated record
        """
        oid, invalid = self._parse_id(record_id)
        if invalid:
            return invalid

        to_set = {key: value for key, value in data.items() if value is not None}
        to_unset = {key: "" for key, value in data.items() if value is None}
        for field in clear_missing or []:
            if field not in data:
                to_unset[field] = ""

        to_set["updatedAt"] = utc_now()
        update_doc: Dict[str, Any] = {"$set": to_set}
        if to_unset:
            update_doc["$unset"] = to_unset

        try:
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                update_doc,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            return self._storage_failure("Update", e)

        if document is None:
            return self._not_found(record_id)
        return ServiceResult.ok([document])

    async def delete(self, record_id: str) -> ServiceResult:
        """
        Delete a record by its identifier

        Returns:
            ServiceResult with count of deleted records
        """
        oid, invalid = self._parse_id(record_id)
        if invalid:
            return invalid

        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            return self._storage_failure("Delete", e)

        if result.deleted_count == 0:
            return self._not_found(record_id)
        return ServiceResult(success=True, data=[], count=result.deleted_count)

    async def replace_all(self, records: List[Dict[str, Any]]) -> ServiceResult:
        """
        Remove every record, then insert ``records`` in order

        Not atomic: concurrent writers may interleave between the two steps.
        """
        now = utc_now()
        documents = [dict(record, createdAt=now, updatedAt=now) for record in records]

        try:
            deleted = await self.collection.delete_many({})
            await self.collection.insert_many(documents)
        except PyMongoError as e:
            return self._storage_failure("Replace-all", e)

        logger.info(
            f"Replaced {deleted.deleted_count} {self.resource_name} records with {len(documents)} new ones"
        )
        return ServiceResult.ok(documents)
