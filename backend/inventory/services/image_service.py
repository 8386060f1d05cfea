"""Image collection service: galleries attached to hotels, rooms and other content."""

import logging
import uuid

from inventory.data.content_types import ContentType, collection_for
from inventory.errors import BatchFailure, ConflictError, NotFoundError, ValidationError
from inventory.schemas.content import ImageIn
from inventory.services.batch import BatchOutcome, aggregate, failure_entry
from inventory.store import EntityStore, UniqueViolation

logger = logging.getLogger(__name__)

COLLECTION = "image_assets"


def serialize(record: dict) -> dict:
    return {
        "id": str(record["id"]),
        "content_type": record["content_type"],
        "content_id": str(record["content_id"]),
        "url": record["url"],
        "alt": record.get("alt"),
        "caption": record.get("caption"),
        "is_cover": record["is_cover"],
        "sort_order": record["sort_order"],
    }


class ImageService:
    """Validates and stores image batches with per-image partial failure."""

    def validate_batch(self, images: list[ImageIn]) -> None:
        """Exactly one cover and no repeated URL within a non-empty batch."""
        if not images:
            return
        seen = set()
        for i, image in enumerate(images):
            if image.url in seen:
                raise ValidationError(
                    f"Duplicate image URL in request: {image.url}",
                    code="DUPLICATE_IMAGE_URL",
                    field=f"images[{i}].url",
                )
            seen.add(image.url)

        covers = sum(1 for image in images if image.is_cover)
        if covers == 0:
            raise ValidationError(
                "One image must be marked as cover", code="NO_COVER_IMAGE", field="images"
            )
        if covers > 1:
            raise ValidationError(
                "Only one image can be marked as cover", code="MULTIPLE_COVER_IMAGES", field="images"
            )

    async def create_collection(
        self,
        store: EntityStore,
        content_type: ContentType,
        content_id: uuid.UUID,
        images: list[ImageIn],
        log: logging.Logger = logger,
    ) -> BatchOutcome:
        """Store a batch of images for one piece of content.

        Images whose URL is already attached to the content are reported as
        duplicates and skipped. Raises ConflictError when every image is a
        duplicate and BatchFailure when none of the rest could be stored.
        """
        content_type = ContentType(content_type).value
        self.validate_batch(images)
        await self._check_content(store, content_type, content_id)

        existing = await store.select(
            COLLECTION, {"content_type": content_type, "content_id": content_id}
        )
        existing_urls = {row["url"] for row in existing}

        outcome = BatchOutcome(requested=len(images))
        pending = []
        for image in images:
            if image.url in existing_urls:
                outcome.failed.append({
                    "url": image.url,
                    "error": "Image already exists for this content",
                    "code": "DUPLICATE_IMAGE",
                })
            else:
                pending.append(image)

        if not pending:
            raise ConflictError(
                "All images already exist for this content",
                code="ALL_DUPLICATES",
                details=outcome.failed,
            )

        # A new cover replaces the old one
        old_covers = [row["id"] for row in existing if row["is_cover"]]
        new_cover = next((image for image in pending if image.is_cover), None)
        if new_cover is not None and old_covers:
            await store.update(COLLECTION, {"id": old_covers}, {"is_cover": False})

        inserted = await aggregate(
            pending,
            lambda image: self._insert(store, content_type, content_id, image),
            lambda image, e: failure_entry("url", image.url, e),
            log=log,
        )
        outcome.successful.extend(inserted.successful)
        outcome.failed.extend(inserted.failed)

        if new_cover is not None and old_covers and not any(img["is_cover"] for img in inserted.successful):
            await store.update(COLLECTION, {"id": old_covers}, {"is_cover": True})
            log.warning(f"New cover for {content_type} {content_id} failed; previous cover restored")

        if not outcome.successful:
            raise BatchFailure(
                "Failed to save any images", code="ALL_FAILED", details=outcome.failed
            )

        log.info(
            f"Images saved for {content_type} {content_id}: "
            f"{len(outcome.successful)}/{outcome.requested}"
        )
        return outcome

    async def _insert(
        self, store: EntityStore, content_type: str, content_id: uuid.UUID, image: ImageIn
    ) -> dict:
        try:
            record = await store.insert(
                COLLECTION,
                {
                    "id": uuid.uuid4(),
                    "content_type": content_type,
                    "content_id": content_id,
                    "url": image.url,
                    "alt": image.alt.strip() if image.alt else None,
                    "caption": image.caption.strip() if image.caption else None,
                    "is_cover": image.is_cover,
                    "sort_order": image.sort_order or 0,
                },
            )
        except UniqueViolation as e:
            raise ConflictError(
                "Image already exists for this content", code="DUPLICATE_IMAGE"
            ) from e
        return serialize(record)

    async def _check_content(self, store: EntityStore, content_type: str, content_id: uuid.UUID) -> None:
        collection = collection_for(content_type)
        if collection and not await store.exists(collection, {"id": content_id}):
            raise NotFoundError(
                f"{content_type.capitalize()} not found", code=f"{content_type.upper()}_NOT_FOUND"
            )


image_service = ImageService()
