"""Database initialization script with seed data."""

from sqlalchemy.orm import Session

from reqanalyst.database import Base, SessionLocal, engine
from reqanalyst.models import Project, User
from reqanalyst.services.auth import AuthService

DEMO_REQUIREMENTS = """\
Library lending system.
Members can search the catalogue, borrow up to five books at a time and renew a loan once.
Librarians register new books, record returns and see overdue loans.
Members get an email reminder two days before a loan is due.
"""


def create_tables():
    """Create all database tables."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")


def seed_data(db: Session):
    """Seed the database with a demo user and project."""
    print("\nSeeding database with sample data...")

    print("Creating user...")
    user = User(
        email="demo@example.com",
        name="Demo User",
        password_hash=AuthService.hash_password("Password123"),
    )
    db.add(user)
    db.flush()

    print("Creating project...")
    db.add(
        Project(
            user_id=user.id,
            name="Library Lending",
            description="Sample project",
            requirement_doc=DEMO_REQUIREMENTS,
        )
    )
    db.commit()

    print("\nSample data created:")
    print("  - User: demo@example.com / Password123")
    print("  - Project: Library Lending")


def init_db():
    """Initialize database with tables and seed data."""
    print("Initializing database...")

    # Create tables
    create_tables()

    # Seed data
    db = SessionLocal()
    try:
        # Check if data already exists
        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"\nDatabase already has {existing_users} users. Skipping seed data.")
            return

        seed_data(db)
        print("\nDatabase initialization complete!")

    except Exception as e:
        print(f"\nError during database initialization: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
