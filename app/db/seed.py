import logging

from sqlalchemy.orm import Session

from app.config import Settings
from app.core.hashing import Hasher
from app.db.models.board import BoardColumn, Project, ProjectMember
from app.db.models.user import User, ROLE_ADMIN

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = ["К работе", "В процессе", "Кодревью", "Тестирование", "Готово"]

DEMO_PROJECT_CODE = "DEMO"
DEMO_PROJECT_NAME = "Demo Project"


def add_default_columns(db: Session, project: Project):
    db.add_all([
        BoardColumn(project_id=project.id, name=name, position=position)
        for position, name in enumerate(DEFAULT_COLUMNS)
    ])


def seed_admin(db: Session, settings: Settings) -> User:
    admin = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
    if admin:
        return admin

    admin = User(
        email=settings.ADMIN_EMAIL,
        name="Admin",
        password_hash=Hasher.hash_password(settings.ADMIN_PASSWORD),
        role=ROLE_ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Seeded admin account %s", admin.email)
    return admin


def seed_demo_project(db: Session, admin: User):
    if db.query(Project).count() > 0:
        return None

    project = Project(code=DEMO_PROJECT_CODE, name=DEMO_PROJECT_NAME)
    db.add(project)
    db.flush()  # to get the id

    db.add(ProjectMember(project_id=project.id, user_id=admin.id))
    add_default_columns(db, project)
    db.commit()
    logger.info("Seeded demo project %s", project.code)
    return project


def seed(db: Session, settings: Settings):
    admin = seed_admin(db, settings)
    seed_demo_project(db, admin)


if __name__ == "__main__":
    from app.config import get_settings
    from app.db.session import Database

    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    with database.session() as session:
        seed(session, settings)
    database.dispose()
