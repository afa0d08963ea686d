"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kitchen_api.main import app
from kitchen_api.models import (
    Base,
    Outlet,
    Category,
    Ingredient,
    Recipe,
    RecipeIngredient,
)
from shared.infrastructure.db import get_db


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Seed helpers
# =============================================================================


def make_ingredient(db, name, cost_per_unit, base_unit="kg", **kwargs):
    ingredient = Ingredient(name=name, cost_per_unit=cost_per_unit, base_unit=base_unit, **kwargs)
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient


def make_recipe(db, outlet, recipe_no, name, lines=(), category=None, **kwargs):
    """Recipe with (ingredient, quantity[, unit]) lines, committed."""
    recipe = Recipe(
        outlet_id=outlet.id,
        category_id=category.id if category is not None else None,
        recipe_no=recipe_no,
        name=name,
        **kwargs,
    )
    for index, line in enumerate(lines):
        ingredient, quantity = line[0], line[1]
        unit = line[2] if len(line) > 2 else None
        recipe.lines.append(
            RecipeIngredient(
                ingredient=ingredient,
                quantity=quantity,
                unit=unit,
                sort_order=index,
            )
        )
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


@pytest.fixture
def seed_outlet(db_session):
    """Create a test outlet."""
    outlet = Outlet(name="Kadıköy Şube", type="Restoran", location="İstanbul")
    db_session.add(outlet)
    db_session.commit()
    db_session.refresh(outlet)
    return outlet


@pytest.fixture
def seed_category(db_session, seed_outlet):
    """Create a menu category on the test outlet."""
    category = Category(outlet_id=seed_outlet.id, name="Ana Yemekler", sort_order=0)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_ingredients(db_session):
    """Two library ingredients priced 5 TL/kg and 10 TL/lt."""
    return [
        make_ingredient(db_session, "Domates", 5, "kg", category="Sebze"),
        make_ingredient(db_session, "Zeytinyağı", 10, "lt", category="Yağ"),
    ]


@pytest.fixture
def seed_recipe(db_session, seed_outlet, seed_category, seed_ingredients):
    """
    The reference scenario: lines 2 x 5 TL and 1 x 10 TL, 5% waste,
    yield 4, sale price 30 TL.
    """
    tomato, oil = seed_ingredients
    return make_recipe(
        db_session,
        seed_outlet,
        "RCP-2026-001",
        "Domates Çorbası",
        lines=[(tomato, 2), (oil, 1)],
        category=seed_category,
        waste_percentage=5,
        yield_amount=4,
        sale_price=30,
        difficulty="Easy",
        allergens={"gluten": True, "milk": True},
    )
