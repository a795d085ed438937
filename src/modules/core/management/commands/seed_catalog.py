from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.categories.dtos import CreateCategoryDTO
from modules.categories.models import Category
from modules.categories.services import build_category_service
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.services import build_product_service
from modules.suppliers.dtos import CreateSupplierDTO
from modules.suppliers.models import Supplier
from modules.suppliers.services import build_supplier_service


class Command(BaseCommand):
    help = "Seed database with a sample catalog (categories, suppliers, products)."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding catalog...")

        categories = self._seed_categories()
        suppliers = self._seed_suppliers()
        products = self._seed_products(categories, suppliers)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"suppliers={len(suppliers)}, "
                f"products={len(products)}"
            )
        )

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        service = build_category_service()
        categories: dict[str, Category] = {}
        seed_categories = [
            ("Frutas", "Frutas frescas", "🍎", None),
            ("Frutas Cítricas", "Laranja, limão e tangerina", "🍊", "Frutas"),
            ("Verduras", "Folhas e hortaliças", "🥬", None),
            ("Bebidas", "Sucos e águas", "🧃", None),
        ]
        for name, description, icon, parent_name in seed_categories:
            category = Category.objects.filter(name=name).first()
            if category is None:
                parent = categories.get(parent_name) if parent_name else None
                category = service.create_category(
                    CreateCategoryDTO(
                        name=name,
                        description=description,
                        icon=icon,
                        parent_id=str(parent.id) if parent else None,
                    )
                )
            categories[name] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_suppliers(self) -> dict[str, Supplier]:
        self.stdout.write("Creating suppliers...")
        service = build_supplier_service()
        suppliers: dict[str, Supplier] = {}
        seed_suppliers = [
            ("Frutas São João Ltda", "contato@frutassaojoao.com.br", "(79) 99988-7766"),
            ("Horta Viva", "vendas@hortaviva.com.br", "+55 11 4002-8922"),
            ("Distribuidora Sergipe", None, None),
        ]
        for name, email, phone in seed_suppliers:
            supplier = Supplier.objects.filter(name=name).first()
            if supplier is None:
                supplier = service.create_supplier(
                    CreateSupplierDTO(name=name, email=email, phone=phone)
                )
            suppliers[name] = supplier
        self.stdout.write(self.style.SUCCESS("Creating suppliers... Done!"))
        return suppliers

    def _seed_products(
        self,
        categories: dict[str, Category],
        suppliers: dict[str, Supplier],
    ) -> list[Product]:
        self.stdout.write("Creating products...")
        service = build_product_service()
        products: list[Product] = []
        catalog = [
            ("Maçã Gala", "Frutas", "Frutas São João Ltda", Decimal("3.50"), Decimal("5.90"), "KG"),
            ("Banana Prata", "Frutas", "Frutas São João Ltda", Decimal("2.80"), Decimal("4.99"), "DZ"),
            ("Laranja Pera", "Frutas Cítricas", "Distribuidora Sergipe", Decimal("1.90"), Decimal("3.49"), "KG"),
            ("Limão Tahiti", "Frutas Cítricas", None, Decimal("2.10"), Decimal("3.99"), "KG"),
            ("Alface Crespa", "Verduras", "Horta Viva", Decimal("1.20"), Decimal("2.50"), "UN"),
            ("Rúcula", "Verduras", "Horta Viva", Decimal("1.50"), Decimal("2.99"), "PC"),
            ("Suco de Laranja 1L", "Bebidas", None, Decimal("6.00"), Decimal("9.90"), "LT"),
            ("Água Mineral 500ml", "Bebidas", None, Decimal("0.80"), Decimal("2.00"), "UN"),
        ]
        for name, category_name, supplier_name, cost, sell, unit in catalog:
            product = Product.objects.filter(name=name).first()
            if product is None:
                supplier = suppliers.get(supplier_name) if supplier_name else None
                product = service.create_product(
                    CreateProductDTO(
                        name=name,
                        category_id=str(categories[category_name].id),
                        supplier_id=str(supplier.id) if supplier else None,
                        cost_price=cost,
                        sell_price=sell,
                        stock_quantity=random.randint(0, 60),
                        unit=unit,
                    )
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products
