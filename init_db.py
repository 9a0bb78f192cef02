"""
Initialize the database and create tables
Run this script once to set up a fresh planner database
"""

from app import create_app
from extensions import db

def init_db():
    """Create every table and list them"""
    app = create_app('development')

    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print(f"Database location: {app.config['SQLALCHEMY_DATABASE_URI']}")

        print("\nTables:")
        for table in db.metadata.sorted_tables:
            print(f"  - {table.name}")

        print("\nRun 'flask seed-demo' to load a sample household.")

if __name__ == '__main__':
    init_db()
