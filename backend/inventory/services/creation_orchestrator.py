"""Creation orchestrator for aggregates spanning several collections.

A primary entity (hotel or room) is written first, then its mandatory
dependents, then the optional SEO and image fan-out. The store commits each
write on its own, so every committed step pushes a compensating delete.
A terminal failure unwinds those deletes newest first and re-raises the
original error; the rollback outcome is only logged.

Terminal failures: any pre-write check, the primary write, a mandatory
dependent write, every requested SEO entry failing, or the request task
being cancelled. The rollback itself is shielded from cancellation. Image
failures are never terminal.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

from inventory.data.content_types import ContentType
from inventory.errors import BatchFailure, ConflictError, InventoryError, ValidationError
from inventory.schemas.content import ImageIn, SeoEntryIn
from inventory.services.batch import BatchOutcome
from inventory.services.compensation import CompensationStack
from inventory.services.image_service import image_service
from inventory.services.seo_service import seo_service
from inventory.store import EntityStore, UniqueViolation

logger = logging.getLogger(__name__)


class CreationState(str, Enum):
    VALIDATING = "validating"
    PRIMARY_WRITTEN = "primary_written"
    DEPENDENTS_WRITTEN = "dependents_written"
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    ROLLED_BACK = "rolled_back"


TRANSITIONS = {
    CreationState.VALIDATING: {CreationState.PRIMARY_WRITTEN},
    CreationState.PRIMARY_WRITTEN: {CreationState.DEPENDENTS_WRITTEN, CreationState.ROLLED_BACK},
    CreationState.DEPENDENTS_WRITTEN: {
        CreationState.SUCCEEDED,
        CreationState.PARTIAL,
        CreationState.ROLLED_BACK,
    },
}


@dataclass
class AggregateResult:
    kind: str
    primary: dict
    # Response key -> created records, in response order
    dependents: dict = field(default_factory=dict)
    # Summary key -> count, for the dependents above
    counts: dict = field(default_factory=dict)
    seo: BatchOutcome | None = None
    images: BatchOutcome | None = None
    state: CreationState = CreationState.PRIMARY_WRITTEN

    @property
    def has_failures(self) -> bool:
        return any(batch is not None and batch.failed for batch in (self.seo, self.images))

    @property
    def status_code(self) -> int:
        return 207 if self.has_failures else 201

    def summary(self) -> dict:
        seo = self.seo or BatchOutcome(requested=0)
        images = self.images or BatchOutcome(requested=0)
        return {
            f"{self.kind}_created": True,
            **self.counts,
            "seo_created": len(seo.successful),
            "seo_failed": len(seo.failed),
            "images_created": len(images.successful),
            "images_failed": images.requested - len(images.successful),
        }

    def to_payload(self) -> dict:
        data = {self.kind: self.primary, **self.dependents}
        if self.seo and self.seo.successful:
            data["seo_metadata"] = self.seo.successful
        if self.seo and self.seo.failed:
            data["seo_errors"] = self.seo.failed
        if self.images and self.images.successful:
            data["images"] = self.images.successful
        if self.images and self.images.failed:
            data["image_errors"] = self.images.failed
        data["summary"] = self.summary()
        return data


class AggregateCreator(ABC):
    """Template for one aggregate creation. Use one instance per request."""

    content_type: ContentType
    collection: str
    exists_code: str

    def __init__(
        self,
        store: EntityStore,
        *,
        log: logging.Logger = logger,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self.store = store
        self.log = log
        self.id_factory = id_factory
        self.state = CreationState.VALIDATING
        self.compensations = CompensationStack(log)

    @property
    def kind(self) -> str:
        return self.content_type.value

    # ─── Hooks ───

    @abstractmethod
    async def validate(self, request: BaseModel) -> None:
        """Pre-write checks. Raise to reject the request before anything is written."""

    @abstractmethod
    def primary_record(self, request: BaseModel) -> dict:
        """Columns of the primary entity, without its id."""

    @abstractmethod
    async def write_dependents(self, primary_id: uuid.UUID, request: BaseModel, result: AggregateResult) -> None:
        """Write mandatory dependents, pushing a compensation after each write."""

    # ─── Template ───

    async def create(self, request: BaseModel) -> AggregateResult:
        seo_entries: list[SeoEntryIn] = request.seo_data or []
        images: list[ImageIn] = request.images or []

        await self.validate(request)
        seo_service.validate_batch(seo_entries)
        image_service.validate_batch(images)

        primary_id = self.id_factory()
        primary = await self._write_primary(primary_id, request)
        result = AggregateResult(kind=self.kind, primary=primary)

        try:
            await self.write_dependents(primary_id, request, result)
            self._transition(CreationState.DEPENDENTS_WRITTEN)
            if seo_entries:
                result.seo = await self._write_seo(primary_id, seo_entries)
        except BaseException as e:
            # Cancellation must not abandon the compensating deletes
            await asyncio.shield(self._rollback(primary_id, e))
            raise

        if images:
            result.images = await self._write_images(primary_id, images)

        self.compensations.clear()
        self._transition(CreationState.PARTIAL if result.has_failures else CreationState.SUCCEEDED)
        result.state = self.state
        self.log.info(f"{self.kind.capitalize()} created: {primary_id} ({self.state.value})")
        return result

    async def insert_dependents(self, collection: str, records: list[dict], owner_id: uuid.UUID) -> list[dict]:
        """Insert records owned by the primary entity and register their removal."""
        if not records:
            return []
        created = await self.store.insert_many(collection, records)
        self.compensations.push(
            f"{collection} for {self.kind} {owner_id}",
            lambda: self.store.delete(collection, {"id": [r["id"] for r in created]}),
        )
        return created

    # ─── Steps ───

    def _transition(self, new_state: CreationState) -> None:
        if new_state not in TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"Invalid creation transition {self.state.value} -> {new_state.value}")
        self.state = new_state

    async def _write_primary(self, primary_id: uuid.UUID, request: BaseModel) -> dict:
        try:
            primary = await self.store.insert(self.collection, {"id": primary_id, **self.primary_record(request)})
        except UniqueViolation as e:
            # A concurrent request won the race past the pre-check
            raise ConflictError(
                f"{self.kind.capitalize()} name already exists", code=self.exists_code
            ) from e
        self.compensations.push(
            f"{self.kind} {primary_id}",
            lambda: self.store.delete(self.collection, {"id": primary_id}),
        )
        self._transition(CreationState.PRIMARY_WRITTEN)
        return primary

    async def _write_seo(self, primary_id: uuid.UUID, entries: list[SeoEntryIn]) -> BatchOutcome:
        outcome = await seo_service.create_batch(
            self.store,
            seo_service.for_page(entries, self.content_type, primary_id),
            log=self.log,
        )
        if outcome.successful:
            seo_ids = [record["id"] for record in outcome.successful]
            self.compensations.push(
                f"seo_metadata for {self.kind} {primary_id}",
                lambda: self.store.delete("seo_metadata", {"id": [uuid.UUID(i) for i in seo_ids]}),
            )
        else:
            raise BatchFailure(
                "Failed to create any SEO metadata",
                code="SEO_CREATE_FAILED",
                details=outcome.failed,
            )
        return outcome

    async def _write_images(self, primary_id: uuid.UUID, images: list[ImageIn]) -> BatchOutcome:
        try:
            return await image_service.create_collection(
                self.store, self.content_type, primary_id, images, log=self.log
            )
        except Exception as e:
            self.log.warning(f"Image collection for {self.kind} {primary_id} failed: {e}")
            if isinstance(e, InventoryError) and isinstance(e.details, list):
                failed = e.details
            elif isinstance(e, InventoryError):
                failed = [{"error": e.message, "code": e.code}]
            else:
                failed = [{"error": str(e), "code": "IMAGE_CREATE_FAILED"}]
            return BatchOutcome(requested=len(images), failed=failed)

    async def _rollback(self, primary_id: uuid.UUID, cause: BaseException) -> None:
        self.log.warning(f"Rolling back {self.kind} {primary_id}: {cause!r}")
        failed = await self.compensations.unwind()
        self._transition(CreationState.ROLLED_BACK)
        if failed:
            self.log.error(
                f"Rollback of {self.kind} {primary_id} incomplete, orphaned rows remain: {', '.join(failed)}"
            )


async def check_references(
    store: EntityStore, collection: str, ids: list[uuid.UUID], code: str, label: str, field: str
) -> None:
    """Raise ValidationError unless every id exists in the collection."""
    if not ids:
        return
    wanted = set(ids)
    found = {row["id"] for row in await store.select(collection, {"id": list(wanted)})}
    if found != wanted:
        raise ValidationError(f"One or more {label} IDs are invalid", code=code, field=field)
