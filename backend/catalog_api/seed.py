"""
Catalog API — Development Seed Data
=====================================

What:  Resets the database and fills it with a small restaurant catalog.
How:   python -m catalog_api.seed
When:  Local development and demos. DESTRUCTIVE: every table is dropped.

Creates:
    - admin user: admin@mail.com / root (use it to log in and register others)
    - 7 categories in two levels (Bebidas → Sucos/Refrigerantes, Pizzas → Doces/Salgadas)
    - 8 products referencing those categories
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import async_session_factory, create_all, dispose_engine, drop_all
from catalog_api.main import setup_logging
from catalog_api.models import Category, Product, User
from catalog_api.security import hash_password

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@mail.com"
ADMIN_PASSWORD = "root"

# (name, parent name)
CATEGORIES: List[Tuple[str, Optional[str]]] = [
    ("Bebidas", None),
    ("Sucos", "Bebidas"),
    ("Refrigerantes", "Bebidas"),
    ("Comida Japonesa", None),
    ("Pizzas", None),
    ("Pizzas Doces", "Pizzas"),
    ("Pizzas Salgadas", "Pizzas"),
]

# (name, qty, price, category names)
PRODUCTS: List[Tuple[str, int, float, List[str]]] = [
    ("Água 350ML", 1, 1.49, ["Bebidas"]),
    ("Suco de Laranja (Jarra)", 1, 14.99, ["Sucos", "Bebidas"]),
    ("Coca-Cola Lata 350ML", 1, 5.49, ["Refrigerantes", "Bebidas"]),
    ("Fanta Laranja Lata 350ML", 1, 3.99, ["Refrigerantes", "Bebidas"]),
    ("Temaki", 8, 44.99, ["Comida Japonesa"]),
    ("Sushi", 12, 49.99, ["Comida Japonesa"]),
    ("Pizza de Calabresa", 1, 59.99, ["Pizzas Salgadas", "Pizzas"]),
    ("Pizza de Brigadeiro", 1, 69.99, ["Pizzas Doces", "Pizzas"]),
]


async def seed(db: AsyncSession) -> None:
    """Insert the admin user, categories and products into an empty schema."""
    db.add(User(email=ADMIN_EMAIL, password_hash=hash_password(ADMIN_PASSWORD)))

    # Parents are listed before their children, so one pass is enough
    by_name: Dict[str, Category] = {}
    for name, parent_name in CATEGORIES:
        category = Category(name=name)
        if parent_name is not None:
            await db.flush()
            category.parent_id = by_name[parent_name].id
        db.add(category)
        by_name[name] = category
    await db.flush()

    for name, qty, price, category_names in PRODUCTS:
        db.add(Product(
            name=name,
            qty=qty,
            price=price,
            categories=[by_name[c] for c in category_names],
        ))
    await db.flush()

    logger.info(
        "Seeded 1 user, %d categories, %d products", len(CATEGORIES), len(PRODUCTS)
    )


async def main() -> None:
    setup_logging()
    logger.info("Dropping and recreating all tables...")
    await drop_all()
    await create_all()

    try:
        async with async_session_factory() as session:
            async with session.begin():
                await seed(session)
        logger.info("Seed complete. Log in with %s / %s", ADMIN_EMAIL, ADMIN_PASSWORD)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
