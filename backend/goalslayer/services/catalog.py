"""Categories and goals: the seeded catalog plus user-authored goals."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from goalslayer.errors import NotFoundError
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal

logger = logging.getLogger(__name__)


# (name, description, icon, color, goals)
DEFAULT_CATALOG = [
    (
        "Personal",
        "Personal development goals",
        "fas fa-user",
        "personal",
        [
            "Read for 30 minutes daily",
            "Practice a new skill for 20 minutes",
            "Write in a personal journal",
            "Learn 5 new words in a foreign language",
        ],
    ),
    (
        "Inner Peace",
        "Mindfulness and spiritual goals",
        "fas fa-leaf",
        "peace",
        [
            "Meditate for 10 minutes",
            "Practice gratitude journaling",
            "Spend 15 minutes in nature",
            "Practice deep breathing exercises",
        ],
    ),
    (
        "Health",
        "Physical and mental health goals",
        "fas fa-heart",
        "health",
        [
            "Exercise for 30 minutes",
            "Drink 8 glasses of water daily",
            "Get 8 hours of sleep",
            "Eat 5 servings of fruits/vegetables",
        ],
    ),
    (
        "Family",
        "Family and relationships goals",
        "fas fa-home",
        "family",
        [
            "Call a family member",
            "Plan a family activity",
            "Have dinner together without devices",
            "Write a letter or message to someone you care about",
        ],
    ),
    (
        "Career",
        "Professional development goals",
        "fas fa-briefcase",
        "career",
        [
            "Update LinkedIn profile",
            "Learn a new professional skill",
            "Network with a colleague or industry peer",
            "Organize and plan upcoming work tasks",
        ],
    ),
    (
        "Fun",
        "Recreation and hobby goals",
        "fas fa-gamepad",
        "fun",
        [
            "Try a new hobby",
            "Watch a documentary",
            "Play a game or do a puzzle",
            "Listen to music or a podcast",
        ],
    ),
]


def seed_catalog(db: Session) -> bool:
    """Insert the default categories and goals if there are none yet.

    Returns True when rows were inserted.
    """
    if db.query(Category.id).first() is not None:
        return False

    for name, description, icon, color, goal_texts in DEFAULT_CATALOG:
        category = Category(name=name, description=description, icon=icon, color=color)
        db.add(category)
        db.flush()  # assigns category.id
        db.add_all(Goal(category_id=category.id, description=text) for text in goal_texts)

    db.commit()
    logger.info("Seeded %d categories", len(DEFAULT_CATALOG))
    return True


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: str) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def visible_goals_query(db: Session, user_id: str, category_id: str | None = None):
    """System goals plus the user's own custom goals."""
    query = db.query(Goal).filter(
        or_(Goal.is_custom.is_(False), Goal.created_by == user_id)
    )
    if category_id is not None:
        query = query.filter(Goal.category_id == category_id)
    return query


def goals_for_category(db: Session, category_id: str, user_id: str) -> list[Goal]:
    get_category(db, category_id)
    # System goals first, then custom
    return (
        visible_goals_query(db, user_id, category_id)
        .order_by(Goal.is_custom, Goal.description)
        .all()
    )


def create_custom_goal(db: Session, category_id: str, user_id: str, description: str) -> Goal:
    get_category(db, category_id)
    goal = Goal(
        category_id=category_id,
        description=description,
        is_custom=True,
        created_by=user_id,
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    logger.info("User %s created custom goal %s", user_id, goal.id)
    return goal
