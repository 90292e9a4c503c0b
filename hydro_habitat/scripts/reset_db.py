# reset_db.py
from hydro_habitat.db.database import Base, engine

from hydro_habitat.models.tank import Tank  # noqa: F401  (registers the table)

def reset_database(bind=None):
    bind = bind or engine
    print("Dropping all tables...")
    Base.metadata.drop_all(bind=bind)
    print("Tables dropped.")

    print("Creating all tables...")
    Base.metadata.create_all(bind=bind)
    print("Database created successfully!")

if __name__ == "__main__":
    print("WARNING: this deletes EVERY tank and recreates the database.")
    confirm = input("Are you sure? Type 'yes' to continue: ")

    if confirm.lower() == 'yes':
        reset_database()
    else:
        print("Operation cancelled.")
