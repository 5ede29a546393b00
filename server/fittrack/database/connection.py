import logging

from pymongo import MongoClient

from fittrack.config import Config

logger = logging.getLogger(__name__)

client = None
db = None

# Initialize database connection with error handling
try:
    if not Config.MONGODB_URI:
        raise ValueError("MONGODB_URI environment variable not set")

    client = MongoClient(Config.MONGODB_URI, serverSelectionTimeoutMS=5000)
    db = client[Config.DB_NAME]

    # Test connection
    client.admin.command("ping")
    logger.info(f"Database connection successful: {Config.DB_NAME}")
except Exception as e:
    logger.warning(f"Database connection failed: {e}")
    client = None
    db = None


def ensure_indexes():
    """Create the per-user lookup indexes (idempotent)."""
    if db is None:
        logger.warning("Skipping index creation, database not available")
        return
    try:
        db.users.create_index([("email", 1)], unique=True, name="ux_user_email")
        db.users.create_index([("username", 1)], unique=True, name="ux_user_username")
        db.workout_plans.create_index([("user_id", 1), ("created_at", -1)], name="idx_plan_user")
        db.workout_sessions.create_index([("user_id", 1), ("date", -1)], name="idx_session_user_date")
        db.workout_tracker_sessions.create_index([("user_id", 1), ("date", -1)], name="idx_tracker_user_date")
        db.food_entries.create_index([("user_id", 1), ("date", -1)], name="idx_food_user_date")
        db.weight_entries.create_index([("user_id", 1), ("date", -1)], name="idx_weight_user_date")
    except Exception as e:
        logger.error(f"Could not ensure indexes: {e}")
