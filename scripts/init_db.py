from travel_portal import create_app
from travel_portal.models import db

app = create_app()

with app.app_context():
    db.create_all()
    print(f"Database initialized successfully at {app.config['SQLALCHEMY_DATABASE_URI']}")
