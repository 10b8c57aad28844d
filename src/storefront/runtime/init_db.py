"""Database initialization script."""

from src.storefront.core.services import DbManageService, DbSessionService


def init_db(drop: bool = False) -> None:
    """Create all database tables, optionally dropping existing ones first."""
    db_manage_service = DbManageService(DbSessionService().engine)
    if drop:
        db_manage_service.drop_all()
    db_manage_service.create_all()


if __name__ == "__main__":
    init_db()
