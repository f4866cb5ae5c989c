"""Category data-access layer."""

from src.catalog.entities._repository import Repository
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.category.table import CategoryTable


class CategoryRepository(Repository[Category, CategoryTable]):
    entity = Category
    table = CategoryTable
    label = "Category"
    search_fields = ("name",)
