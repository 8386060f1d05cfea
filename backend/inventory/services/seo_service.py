"""SEO metadata service: per-language slugs, titles and descriptions for pages."""

import logging
import uuid

from inventory.data.content_types import ACTIVE_LANGUAGES, RESERVED_SLUGS, ContentType, collection_for
from inventory.errors import ConflictError, NotFoundError, ValidationError
from inventory.schemas.content import SeoEntryIn, SeoMetadataIn
from inventory.services.batch import BatchOutcome, aggregate, failure_entry
from inventory.store import EntityStore, ForeignKeyViolation, UniqueViolation

logger = logging.getLogger(__name__)

COLLECTION = "seo_metadata"
HOME_SLUG = "home"


def clean_slug(slug: str) -> str:
    return slug.strip().lower()


def normalize_lookup_slug(slug: str | None) -> str:
    """Turn a request path into the slug stored for it ('' and '/' are home)."""
    if not slug or slug == "/":
        return HOME_SLUG
    return slug.strip("/").lower() or HOME_SLUG


def serialize(record: dict) -> dict:
    return {
        "id": str(record["id"]),
        "page_type": record["page_type"],
        "page_id": str(record["page_id"]) if record.get("page_id") else None,
        "slug": record["slug"],
        "lang": record["lang"],
        "title": record["title"],
        "description": record["description"],
        "og_image": record.get("og_image"),
    }


class SeoService:
    """Creates and resolves SEO records. Every method takes the store explicitly."""

    def validate_batch(self, entries: list[SeoEntryIn]) -> None:
        """Reject a batch that repeats a language for the same page."""
        seen = set()
        for i, entry in enumerate(entries):
            key = (
                getattr(entry, "page_type", None),
                getattr(entry, "page_id", None),
                entry.lang,
            )
            if key in seen:
                raise ValidationError(
                    f"Duplicate SEO language '{entry.lang}' for the same page",
                    code="DUPLICATE_LANGUAGE",
                    field=f"seo_data[{i}].lang",
                )
            seen.add(key)

    def for_page(self, entries: list[SeoEntryIn], page_type: ContentType, page_id: uuid.UUID) -> list[SeoMetadataIn]:
        """Bind entries submitted with a new entity to that entity."""
        return [
            SeoMetadataIn(**entry.model_dump(), page_type=page_type, page_id=page_id)
            for entry in entries
        ]

    async def create(self, store: EntityStore, entry: SeoMetadataIn) -> dict:
        slug = clean_slug(entry.slug)
        page_type = ContentType(entry.page_type).value

        if slug in RESERVED_SLUGS:
            raise ValidationError(
                f"Slug '{slug}' is reserved and cannot be used",
                code="RESERVED_SLUG",
                field="slug",
            )

        await self._check_page(store, page_type, entry.page_id)

        same_slug = await store.select(COLLECTION, {"page_type": page_type, "slug": slug})
        for row in same_slug:
            if row["page_id"] != entry.page_id or row["lang"] == entry.lang:
                raise ConflictError(
                    f"Slug '{slug}' is already used by another {page_type}",
                    code="SLUG_EXISTS",
                    field="slug",
                )

        # Static pages have no id; their slug identifies them
        if entry.page_id is not None and await store.exists(
            COLLECTION, {"page_type": page_type, "page_id": entry.page_id, "lang": entry.lang}
        ):
            raise ConflictError(
                f"SEO metadata for this {page_type} already exists in '{entry.lang}'",
                code="SEO_EXISTS",
                field="lang",
            )

        try:
            record = await store.insert(
                COLLECTION,
                {
                    "id": uuid.uuid4(),
                    "page_type": page_type,
                    "page_id": entry.page_id,
                    "slug": slug,
                    "lang": entry.lang,
                    "title": entry.title.strip(),
                    "description": entry.description.strip(),
                    "og_image": entry.og_image,
                },
            )
        except UniqueViolation as e:
            # Lost a race with a concurrent writer
            raise ConflictError(
                f"Slug '{slug}' was taken while saving", code="DUPLICATE_SLUG", field="slug"
            ) from e
        except ForeignKeyViolation as e:
            raise ValidationError(
                "SEO metadata references an unknown page", code="INVALID_PAGE_REFERENCE"
            ) from e

        logger.info(f"SEO metadata created: {page_type}/{slug} ({entry.lang})")
        return serialize(record)

    async def create_batch(
        self,
        store: EntityStore,
        entries: list[SeoMetadataIn],
        log: logging.Logger = logger,
    ) -> BatchOutcome:
        """Create each entry independently; failures are reported per language."""
        return await aggregate(
            entries,
            lambda entry: self.create(store, entry),
            lambda entry, e: {"lang": entry.lang, **failure_entry("slug", entry.slug, e)},
            log=log,
        )

    async def get_by_slug(self, store: EntityStore, slug: str | None) -> dict:
        """Both language variants for a path, or NotFoundError when neither exists."""
        slug = normalize_lookup_slug(slug)
        rows = await store.select(COLLECTION, {"slug": slug})
        result = {lang: None for lang in ACTIVE_LANGUAGES}
        for row in rows:
            if row["lang"] in result and result[row["lang"]] is None:
                result[row["lang"]] = serialize(row)
        if not any(result.values()):
            raise NotFoundError(f"No SEO metadata found for '{slug}'")
        return result

    async def slugs_for(self, store: EntityStore, page_type: ContentType, page_ids: list) -> dict:
        """Map page id to {slug_th, slug_en} for list endpoints."""
        if not page_ids:
            return {}
        rows = await store.select(
            COLLECTION, {"page_type": ContentType(page_type).value, "page_id": list(page_ids)}
        )
        slugs: dict = {}
        for row in rows:
            slugs.setdefault(row["page_id"], {})[f"slug_{row['lang']}"] = row["slug"]
        return slugs

    async def _check_page(self, store: EntityStore, page_type: str, page_id: uuid.UUID | None) -> None:
        collection = collection_for(page_type)
        if collection is None:
            return
        if page_id is None:
            raise ValidationError(
                f"page_id is required for {page_type} pages", code="PAGE_ID_REQUIRED", field="page_id"
            )
        if not await store.exists(collection, {"id": page_id}):
            raise NotFoundError(
                f"{page_type.capitalize()} not found", code=f"{page_type.upper()}_NOT_FOUND", field="page_id"
            )


seo_service = SeoService()
