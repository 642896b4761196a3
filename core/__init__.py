"""
Profile Service Core Library.

Database management, models, repositories, the profile domain
(update value type, ledgers, per-owner locks), configuration and logging.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import User, Profile
    from core.repositories import ProfileRepository, UserRepository

    # Profile domain
    from core.profile import ProfileUpdate, ledger, owner_locks

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"
