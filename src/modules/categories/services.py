"""Category service layer (Use Cases).

Orchestrates business logic for the Category aggregate, delegating
persistence to the injected ``ICategoryRepository``.

Business rules enforced here:
- Category name must be unique (exact match).
- A referenced parent must exist.
- A category cannot be its own parent. Longer loops are not detected.
- A category with subcategories cannot be removed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from modules.categories.constants import CATEGORY_CONSTRAINTS
from modules.categories.exceptions import (
    CategoryAlreadyExists,
    CategoryHasChildren,
    CategoryInUse,
    CategoryNotFound,
    CategorySelfParenting,
)
from modules.categories.models import Category
from modules.core.validation import ensure_valid

if TYPE_CHECKING:
    from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
    from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryService:
    """Application service for Category use-cases.

    Receives an ``ICategoryRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Create a new category.

        Raises:
            InvalidArgument: if a field constraint is violated.
            CategoryAlreadyExists: if the name is already taken.
            CategoryNotFound: if ``parent_id`` does not resolve.
        """
        ensure_valid(dto.model_dump(), CATEGORY_CONSTRAINTS)
        log = logger.bind(name=dto.name)

        self._ensure_name_available(dto.name)

        parent = None
        if dto.parent_id is not None:
            parent = self._get_parent(dto.parent_id)

        category = Category(
            name=dto.name,
            description=dto.description,
            icon=dto.icon,
            parent=parent,
        )
        category = self._save(category)
        log.info("category.created", category_id=str(category.id))
        return category

    @transaction.atomic
    def update_category(self, id: str, dto: UpdateCategoryDTO) -> Category:
        """Apply the supplied fields to an existing category.

        Raises:
            CategoryNotFound: if the category or the new parent does not exist.
            CategoryAlreadyExists: if the new name belongs to another category.
            CategorySelfParenting: if ``parent_id`` equals the category's id.
        """
        category = self.get_category(id)
        changes = ensure_valid(
            dto.model_dump(exclude_unset=True), CATEGORY_CONSTRAINTS, partial=True
        )
        log = logger.bind(category_id=str(category.id))

        if "name" in changes and changes["name"] != category.name:
            self._ensure_name_available(changes["name"])
            category.name = changes["name"]

        if "parent_id" in changes:
            parent_id = changes["parent_id"]
            if parent_id is None:
                category.parent = None
            else:
                parent = self._get_parent(parent_id)
                # Only direct self-parenting is rejected; A -> B -> A is allowed.
                if parent.id == category.id:
                    log.warning("category.self_parenting")
                    raise CategorySelfParenting(
                        "A category cannot be its own parent.",
                        field="parent_id",
                        value=parent_id,
                    )
                category.parent = parent

        for field in ("description", "icon"):
            if field in changes:
                setattr(category, field, changes[field])

        category = self._save(category)
        log.info("category.updated", fields=sorted(changes))
        return category

    @transaction.atomic
    def delete_category(self, id: str) -> None:
        """Physically remove a childless category.

        Raises:
            CategoryNotFound: if the category does not exist.
            CategoryHasChildren: if any category has it as parent.
            CategoryInUse: if products still reference it.
        """
        category = self.get_category(id)
        log = logger.bind(category_id=str(category.id))

        if self._repo.has_children(str(category.id)):
            log.warning("category.has_children")
            raise CategoryHasChildren(
                f'Category "{category.name}" has subcategories and cannot be removed.',
                field="id",
                value=id,
            )

        try:
            self._repo.delete(str(category.id))
        except ProtectedError as exc:
            log.warning("category.in_use")
            raise CategoryInUse(
                f'Category "{category.name}" is referenced by products.',
                field="id",
                value=id,
            ) from exc
        log.info("category.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_categories(self) -> List[Category]:
        """All categories, newest first."""
        return self._repo.list()

    def get_category(self, id: str) -> Category:
        """Retrieve a single category by ID.

        Raises:
            CategoryNotFound: if the category does not exist.
        """
        category = self._repo.get_by_id(id)
        if not category:
            raise CategoryNotFound(
                f'Category with ID "{id}" not found.', field="id", value=id
            )
        return category

    def list_subcategories(self, parent_id: str) -> List[Category]:
        """Direct children of ``parent_id`` ordered by name.

        Raises:
            CategoryNotFound: if the parent itself does not exist.
        """
        parent = self.get_category(parent_id)
        return self._repo.list_children(str(parent.id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_name_available(self, name: str) -> None:
        if self._repo.get_by_name(name):
            logger.warning("category.duplicate_name", name=name)
            raise CategoryAlreadyExists(
                f'Category with name "{name}" already exists.',
                field="name",
                value=name,
            )

    def _get_parent(self, parent_id: str) -> Category:
        parent = self._repo.get_by_id(parent_id)
        if not parent:
            logger.warning("category.parent_not_found", parent_id=str(parent_id))
            raise CategoryNotFound(
                f'Parent category with ID "{parent_id}" not found.',
                field="parent_id",
                value=parent_id,
            )
        return parent

    def _save(self, category: Category) -> Category:
        try:
            return self._repo.save(category)
        except IntegrityError as exc:
            raise CategoryAlreadyExists(
                f'Category with name "{category.name}" already exists.',
                field="name",
                value=category.name,
            ) from exc


def build_category_service() -> CategoryService:
    """``CategoryService`` wired to the Django ORM repository."""
    from modules.categories.repositories.django_repository import (
        CategoryDjangoRepository,
    )

    return CategoryService(repository=CategoryDjangoRepository())
